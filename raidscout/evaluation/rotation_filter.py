"""
Rotation Filter
===============

Scores a raid's rotation against the user's rotation whitelist. The score is
the number of leading bosses that match a whitelisted rotation; overlays use
it to decide how strongly to highlight the raid.

Rules:
1. Exact match of the whole rotation -> number of bosses in the rotation
2. Otherwise, the first whitelist entry whose bosses all match the rotation
   from the start, with at least MIN_SEGMENT_MATCHES of them -> that count
3. Otherwise 0
"""

import re
from typing import Iterable, List, Optional

from raidscout.core.models import Raid

SPLIT_REGEX = re.compile(r'\s*,\s*')

MIN_SEGMENT_MATCHES: int = 2


def split_segments(rotation: str) -> List[str]:
    """'Tekton, Vasa' -> ['tekton', 'vasa']"""
    return SPLIT_REGEX.split(rotation.strip().lower())


def count_rotation_matches(rotation: Optional[str], whitelist: Iterable[str]) -> int:
    """
    Number of leading rotation segments matched by the whitelist.

    Args:
        rotation: Comma separated boss names in encounter order (case-insensitive)
        whitelist: Whitelisted rotations in the same format

    Returns:
        Segment count of the best qualifying match, or 0
    """
    if not rotation:
        return 0

    bosses = split_segments(rotation)
    entries = [split_segments(entry) for entry in whitelist if entry.strip()]

    if bosses in entries:
        return len(bosses)

    for whitelisted in entries:
        matches = 0
        for i, boss in enumerate(whitelisted):
            if i < len(bosses) and boss == bosses[i]:
                matches += 1
            else:
                matches = 0
                break

        if matches >= MIN_SEGMENT_MATCHES:
            return matches

    return 0


def rotation_matches(raid: Optional[Raid], whitelist: Iterable[str]) -> int:
    """count_rotation_matches for a raid (0 when there is no raid or no rotation)."""
    if raid is None:
        return 0
    return count_rotation_matches(raid.rotation_string, whitelist)
