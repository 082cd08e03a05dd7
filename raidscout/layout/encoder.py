"""
Layout Encoder
==============

Stage 3 of the pipeline: serialize the room grid into a canonical code.

Code format:
    8 tokens per floor, floors 0..2 joined with '|'
    token = type code + variant code   e.g. '#-', 'CS' (Shamans), 'PI' (Ice Demon)
    absent slot = '??'

Example (floor 0 fully observed, floors 1-2 unknown):
    '#-S-CSPCF-CV.-$-|????????????????|????????????????'
"""

from typing import Dict, List, Optional, Sequence, Union

from raidscout.core.definitions import (
    FLOOR_SEPARATOR,
    FLOOR_COUNT,
    SLOTS_PER_FLOOR,
    TOTAL_SLOTS,
    TOKEN_WIDTH,
    UNKNOWN_TOKEN,
    WILDCARD,
    BOSS_BY_CODE,
    NO_VARIANT,
    PUZZLE_BY_CODE,
    TYPE_BY_CODE,
    RoomType,
    variant_code,
)
from raidscout.core.models import Room

RoomGrid = Union[Dict[int, Room], Sequence[Optional[Room]]]


def encode_room(room: Optional[Room]) -> str:
    """Token for a single slot."""
    if room is None:
        return UNKNOWN_TOKEN
    return room.type.code + variant_code(room.boss, room.puzzle)


def encode_layout(rooms: RoomGrid) -> str:
    """
    Encode a room grid in traversal order (floor, then slot).

    Args:
        rooms: index -> Room mapping, or a sequence of TOTAL_SLOTS optional rooms

    Returns:
        Canonical code string

    Raises:
        ValueError: if a sequence holds more than TOTAL_SLOTS rooms
    """
    if isinstance(rooms, dict):
        slots = [rooms.get(i) for i in range(TOTAL_SLOTS)]
    else:
        if len(rooms) > TOTAL_SLOTS:
            raise ValueError(f"Room grid holds at most {TOTAL_SLOTS} slots, got {len(rooms)}")
        slots = list(rooms) + [None] * (TOTAL_SLOTS - len(rooms))

    floors = []
    for floor in range(FLOOR_COUNT):
        start = floor * SLOTS_PER_FLOOR
        floors.append(''.join(encode_room(room) for room in slots[start:start + SLOTS_PER_FLOOR]))
    return FLOOR_SEPARATOR.join(floors)


def split_code(code: str) -> List[str]:
    """
    Split a code (or catalog pattern) into its slot tokens.

    Raises:
        ValueError: if the code is malformed
    """
    floors = code.split(FLOOR_SEPARATOR)
    if len(floors) != FLOOR_COUNT:
        raise ValueError(f"Code must have {FLOOR_COUNT} floors, got {len(floors)}: {code!r}")

    tokens = []
    for floor in floors:
        if len(floor) != SLOTS_PER_FLOOR * TOKEN_WIDTH:
            raise ValueError(f"Floor must have {SLOTS_PER_FLOOR} tokens: {floor!r}")
        for i in range(0, len(floor), TOKEN_WIDTH):
            token = floor[i:i + TOKEN_WIDTH]
            if not is_valid_token(token):
                raise ValueError(f"Invalid token {token!r} in code {code!r}")
            tokens.append(token)
    return tokens


def is_valid_token(token: str) -> bool:
    """True for tokens built from the code alphabet, wildcards allowed."""
    if len(token) != TOKEN_WIDTH:
        return False
    type_char, variant_char = token
    if type_char == WILDCARD:
        return variant_char == WILDCARD or variant_char == NO_VARIANT \
            or variant_char in BOSS_BY_CODE or variant_char in PUZZLE_BY_CODE
    room_type = TYPE_BY_CODE.get(type_char)
    if room_type is None:
        return False
    if variant_char == WILDCARD:
        return True
    if room_type is RoomType.COMBAT:
        return variant_char in BOSS_BY_CODE
    if room_type is RoomType.PUZZLE:
        return variant_char in PUZZLE_BY_CODE
    return variant_char == NO_VARIANT


def tokens_compatible(a: str, b: str) -> bool:
    """Two tokens match when every character is equal or either one is the wildcard."""
    return all(x == y or x == WILDCARD or y == WILDCARD for x, y in zip(a, b))
