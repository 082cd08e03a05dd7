"""
RAIDSCOUT DEFINITIONS
=====================
Central constants and type definitions for the entire project.

This file is the SINGLE SOURCE OF TRUTH for:
- Scene geometry (scene size, room size, planes)
- Room types, boss variants and puzzle variants
- Layout code alphabet (type codes, variant codes, wildcard)
- Default rotation constraints

Import from here instead of duplicating constants across modules.

"""

from typing import Dict, Optional, Tuple
from enum import Enum

# ==========================================
# SCENE GEOMETRY
# ==========================================

# Loaded scene is SCENE_SIZE x SCENE_SIZE tiles on each of PLANE_COUNT planes
SCENE_SIZE: int = 104
PLANE_COUNT: int = 4

# Template chunks cover 8x8 tiles
CHUNK_SIZE: int = 8
CHUNKS_PER_SIDE: int = SCENE_SIZE // CHUNK_SIZE  # 13

# Every chamber occupies a ROOM_MAX_SIZE x ROOM_MAX_SIZE block
ROOM_MAX_SIZE: int = 32

# Plane holding the lobby and the anchor marker
LOBBY_PLANE: int = 3

# Wall object that marks the reference corner of the room grid
ANCHOR_OBJECT_ID: int = 12231

# Raid grid dimensions
FLOOR_COUNT: int = 3
SLOTS_PER_FLOOR: int = 8
TOTAL_SLOTS: int = FLOOR_COUNT * SLOTS_PER_FLOOR  # 24

# Sentinel used in snapshot arrays for "nothing here"
ABSENT: int = -1


# ==========================================
# ROOM CLASSIFICATION
# ==========================================

class RoomType(Enum):
    """Kind of chamber occupying a slot. Value is the layout code character."""
    START = '#'
    END = '$'
    SCAVENGERS = 'S'
    FARMING = 'F'
    COMBAT = 'C'
    PUZZLE = 'P'
    EMPTY = '.'

    @property
    def code(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        return self.name.capitalize()


class Boss(Enum):
    """Combat encounter variants: (code character, display name)."""
    TEKTON = ('T', 'Tekton')
    MUTTADILES = ('M', 'Muttadiles')
    GUARDIANS = ('G', 'Guardians')
    VESPULA = ('V', 'Vespula')
    SHAMANS = ('S', 'Shamans')
    VASA = ('A', 'Vasa')
    VANGUARDS = ('N', 'Vanguards')
    MYSTICS = ('Y', 'Mystics')

    @property
    def code(self) -> str:
        return self.value[0]

    @property
    def display_name(self) -> str:
        return self.value[1]


class Puzzle(Enum):
    """Puzzle encounter variants: (code character, display name)."""
    CRABS = ('C', 'Crabs')
    ICE_DEMON = ('I', 'Ice Demon')
    TIGHTROPE = ('R', 'Tightrope')
    THIEVING = ('H', 'Thieving')

    @property
    def code(self) -> str:
        return self.value[0]

    @property
    def display_name(self) -> str:
        return self.value[1]


# ==========================================
# LAYOUT CODE ALPHABET
# ==========================================

# Each slot encodes to TOKEN_WIDTH characters: type code + variant code
TOKEN_WIDTH: int = 2

# Variant character for rooms that carry neither a boss nor a puzzle
NO_VARIANT: str = '-'

# Matches any character in the same position of the other code
WILDCARD: str = '?'

# Token for a slot that could not be observed
UNKNOWN_TOKEN: str = WILDCARD * TOKEN_WIDTH

# Separates the floors of a code
FLOOR_SEPARATOR: str = '|'

# Reverse lookups for decoding tokens
TYPE_BY_CODE: Dict[str, RoomType] = {t.code: t for t in RoomType}
BOSS_BY_CODE: Dict[str, Boss] = {b.code: b for b in Boss}
PUZZLE_BY_CODE: Dict[str, Puzzle] = {p.code: p for p in Puzzle}


# ==========================================
# ROTATION CONSTRAINTS
# ==========================================

# (before, after): `before` must be fought ahead of `after` whenever both
# are present in the same raid. Must stay acyclic.
DEFAULT_ROTATION_CONSTRAINTS: Tuple[Tuple[Boss, Boss], ...] = (
    (Boss.TEKTON, Boss.VASA),
    (Boss.GUARDIANS, Boss.MYSTICS),
    (Boss.SHAMANS, Boss.VASA),
    (Boss.MUTTADILES, Boss.VANGUARDS),
    (Boss.VASA, Boss.VESPULA),
)


def variant_code(boss: Optional[Boss], puzzle: Optional[Puzzle]) -> str:
    """Variant character for a room: boss code, puzzle code or NO_VARIANT."""
    if boss is not None:
        return boss.code
    if puzzle is not None:
        return puzzle.code
    return NO_VARIANT


# ==========================================
# EXPORTS
# ==========================================

__all__ = [
    # Geometry
    'SCENE_SIZE',
    'PLANE_COUNT',
    'CHUNK_SIZE',
    'CHUNKS_PER_SIDE',
    'ROOM_MAX_SIZE',
    'LOBBY_PLANE',
    'ANCHOR_OBJECT_ID',
    'FLOOR_COUNT',
    'SLOTS_PER_FLOOR',
    'TOTAL_SLOTS',
    'ABSENT',

    # Enums
    'RoomType',
    'Boss',
    'Puzzle',

    # Code alphabet
    'TOKEN_WIDTH',
    'NO_VARIANT',
    'WILDCARD',
    'UNKNOWN_TOKEN',
    'FLOOR_SEPARATOR',
    'TYPE_BY_CODE',
    'BOSS_BY_CODE',
    'PUZZLE_BY_CODE',
    'variant_code',

    # Rotation
    'DEFAULT_ROTATION_CONSTRAINTS',
]
