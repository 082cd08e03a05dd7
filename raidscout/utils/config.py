"""
Scout Configuration
===================

User settings supplied by the configuration collaborator, plus the list
parsing shared by every whitelist/blacklist.

List formats:
- rooms / layouts:  "Tekton, vasa ,Crabs"        comma separated, any spacing
- rotations:        "[Tekton, Vasa] [Shamans, Vasa, Vanguards]"
                    bracket-delimited entries, de-duplicated in order

All entries are lower-cased.
"""

import json
import logging
import re
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from raidscout.core.models import Raid, Room
from raidscout.data.grid_scanner import BoundaryPolicy

logger = logging.getLogger(__name__)

SPLIT_REGEX = re.compile(r'\s*,\s*')
ROTATION_REGEX = re.compile(r'\[(.*?)\]')


def split_config_list(value: str) -> List[str]:
    """Split a comma list; an empty setting yields an empty list."""
    value = value.strip().lower()
    if not value:
        return []
    return SPLIT_REGEX.split(value)


def parse_rotation_whitelist(value: str) -> List[str]:
    """Extract bracketed rotations, lower-cased and without duplicates."""
    rotations: List[str] = []
    for match in ROTATION_REGEX.finditer(value):
        rotation = match.group(1).lower()
        if rotation not in rotations:
            rotations.append(rotation)
    return rotations


@dataclass
class ScoutConfig:
    """Settings consumed by the pipeline and its collaborators."""
    whitelisted_rooms: str = ''
    blacklisted_rooms: str = ''
    whitelisted_rotations: str = ''
    whitelisted_layouts: str = ''
    scout_overlay_at_bank: bool = False  # Keep the last raid after leaving
    layouts_path: Optional[str] = None   # Catalog override; bundled catalog when None
    boundary: BoundaryPolicy = field(default_factory=BoundaryPolicy)

    @property
    def room_whitelist(self) -> List[str]:
        return split_config_list(self.whitelisted_rooms)

    @property
    def room_blacklist(self) -> List[str]:
        return split_config_list(self.blacklisted_rooms)

    @property
    def rotation_whitelist(self) -> List[str]:
        return parse_rotation_whitelist(self.whitelisted_rotations)

    @property
    def layout_whitelist(self) -> List[str]:
        return split_config_list(self.whitelisted_layouts)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ScoutConfig':
        """Build a config from a dict; unknown keys are logged and ignored."""
        known = {f.name for f in fields(cls)}
        for key in data:
            if key not in known:
                logger.warning(f"Ignoring unknown config key: {key}")

        kwargs = {k: v for k, v in data.items() if k in known and k != 'boundary'}
        boundary = data.get('boundary')
        if boundary is not None:
            kwargs['boundary'] = _parse_boundary(boundary)
        return cls(**kwargs)

    @classmethod
    def load(cls, path: Union[str, Path]) -> 'ScoutConfig':
        with open(path, 'r', encoding='utf-8') as f:
            return cls.from_dict(json.load(f))


def _parse_boundary(data: Dict[str, Any]) -> BoundaryPolicy:
    defaults = BoundaryPolicy()
    edge_slots = data.get('scene_edge_slots', defaults.scene_edge_slots)
    if edge_slots is not None:
        if len(edge_slots) != 2:
            raise ValueError(f"scene_edge_slots must be a [low, high] pair, got {edge_slots!r}")
        edge_slots = (int(edge_slots[0]), int(edge_slots[1]))
    return BoundaryPolicy(
        edge_column=data.get('edge_column', defaults.edge_column),
        scene_edge_slots=edge_slots,
        row_break_slot=data.get('row_break_slot', defaults.row_break_slot),
    )


# ==========================================
# LIST CHECKS FOR OVERLAYS
# ==========================================

def is_room_whitelisted(room: Room, whitelist: List[str]) -> bool:
    """True if the room's name (boss, puzzle or type) is whitelisted."""
    return room.name.lower() in whitelist


def is_room_blacklisted(room: Room, blacklist: List[str]) -> bool:
    return room.name.lower() in blacklist


def is_layout_whitelisted(raid: Optional[Raid], whitelist: List[str]) -> bool:
    """True if the raid matched a layout whose name is whitelisted."""
    if raid is None or raid.layout is None:
        return False
    return raid.layout.name.lower() in whitelist
