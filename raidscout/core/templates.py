"""
Instance Templates
==================

Every 8x8 chunk of an instanced scene is copied from a template area of the
static world. The copy is described by a packed integer (the chunk template
code):

    bits 24-25  source plane
    bits 14-23  source chunk x  (world x // 8)
    bits  3-13  source chunk y  (world y // 8)
    bits  1-2   rotation (0-3)

Chamber templates occupy 32x32 blocks of the world. A chunk code resolves to
the template whose block contains the decoded source coordinates.

TEMPLATE_ROOMS is the closed template -> room classification table. It is
checked for completeness when this module is imported.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from raidscout.core.definitions import (
    ABSENT,
    CHUNK_SIZE,
    ROOM_MAX_SIZE,
    Boss,
    Puzzle,
    RoomType,
)


class InstanceTemplate(Enum):
    """Known chamber templates: (world x, world y, plane, width, height)."""
    RAIDS_LOBBY = (3264, 5152, 3, ROOM_MAX_SIZE, ROOM_MAX_SIZE)
    RAIDS_START = (3264, 5184, 3, ROOM_MAX_SIZE, ROOM_MAX_SIZE)
    RAIDS_END = (3232, 5152, 3, ROOM_MAX_SIZE, ROOM_MAX_SIZE)
    RAIDS_SCAVENGERS = (3232, 5216, 3, ROOM_MAX_SIZE, ROOM_MAX_SIZE)
    RAIDS_SCAVENGERS2 = (3232, 5216, 2, ROOM_MAX_SIZE, ROOM_MAX_SIZE)
    RAIDS_SHAMANS = (3296, 5248, 3, ROOM_MAX_SIZE, ROOM_MAX_SIZE)
    RAIDS_VASA = (3296, 5280, 3, ROOM_MAX_SIZE, ROOM_MAX_SIZE)
    RAIDS_VANGUARDS = (3264, 5280, 3, ROOM_MAX_SIZE, ROOM_MAX_SIZE)
    RAIDS_ICE_DEMON = (3296, 5312, 2, ROOM_MAX_SIZE, ROOM_MAX_SIZE)
    RAIDS_THIEVING = (3264, 5312, 2, ROOM_MAX_SIZE, ROOM_MAX_SIZE)
    RAIDS_FARMING = (3264, 5248, 3, ROOM_MAX_SIZE, ROOM_MAX_SIZE)
    RAIDS_FARMING2 = (3264, 5248, 2, ROOM_MAX_SIZE, ROOM_MAX_SIZE)
    RAIDS_MUTTADILES = (3328, 5216, 2, ROOM_MAX_SIZE, ROOM_MAX_SIZE)
    RAIDS_MYSTICS = (3328, 5248, 2, ROOM_MAX_SIZE, ROOM_MAX_SIZE)
    RAIDS_TEKTON = (3328, 5280, 2, ROOM_MAX_SIZE, ROOM_MAX_SIZE)
    RAIDS_TIGHTROPE = (3296, 5184, 3, ROOM_MAX_SIZE, ROOM_MAX_SIZE)
    RAIDS_GUARDIANS = (3296, 5216, 3, ROOM_MAX_SIZE, ROOM_MAX_SIZE)
    RAIDS_CRABS = (3296, 5184, 2, ROOM_MAX_SIZE, ROOM_MAX_SIZE)
    RAIDS_VESPULA = (3296, 5280, 2, ROOM_MAX_SIZE, ROOM_MAX_SIZE)

    @property
    def base_x(self) -> int:
        return self.value[0]

    @property
    def base_y(self) -> int:
        return self.value[1]

    @property
    def plane(self) -> int:
        return self.value[2]

    @property
    def width(self) -> int:
        return self.value[3]

    @property
    def height(self) -> int:
        return self.value[4]

    def contains(self, x: int, y: int, plane: int) -> bool:
        """True if the world position lies inside this template's block."""
        return (plane == self.plane
                and self.base_x <= x < self.base_x + self.width
                and self.base_y <= y < self.base_y + self.height)

    @classmethod
    def find_match(cls, chunk_code: int) -> Optional['InstanceTemplate']:
        """
        Resolve a chunk template code to the template it was copied from.

        Args:
            chunk_code: Packed chunk code (see module docstring)

        Returns:
            The matching template, or None if the code is absent or lies
            outside every known template
        """
        if chunk_code == ABSENT:
            return None

        x, y, plane, _ = decode_chunk(chunk_code)
        for template in cls:
            if template.contains(x, y, plane):
                return template
        return None


def decode_chunk(chunk_code: int) -> Tuple[int, int, int, int]:
    """Unpack a chunk code into (world x, world y, plane, rotation)."""
    rotation = (chunk_code >> 1) & 0x3
    y = ((chunk_code >> 3) & 0x7FF) * CHUNK_SIZE
    x = ((chunk_code >> 14) & 0x3FF) * CHUNK_SIZE
    plane = (chunk_code >> 24) & 0x3
    return x, y, plane, rotation


def encode_chunk(x: int, y: int, plane: int, rotation: int = 0) -> int:
    """Pack a world position into a chunk code; inverse of decode_chunk."""
    return ((plane & 0x3) << 24
            | ((x // CHUNK_SIZE) & 0x3FF) << 14
            | ((y // CHUNK_SIZE) & 0x7FF) << 3
            | (rotation & 0x3) << 1)


def template_chunk(template: InstanceTemplate, rotation: int = 0) -> int:
    """Chunk code pointing at the base of a template."""
    return encode_chunk(template.base_x, template.base_y, template.plane, rotation)


# ==========================================
# TEMPLATE -> ROOM TABLE
# ==========================================

@dataclass(frozen=True)
class RoomSpec:
    """Classification carried by a template: type plus optional variant."""
    type: RoomType
    boss: Optional[Boss] = None
    puzzle: Optional[Puzzle] = None

    def __post_init__(self):
        if (self.boss is not None) != (self.type is RoomType.COMBAT):
            raise ValueError(f"boss must be set iff type is COMBAT: {self}")
        if (self.puzzle is not None) != (self.type is RoomType.PUZZLE):
            raise ValueError(f"puzzle must be set iff type is PUZZLE: {self}")


EMPTY_SPEC = RoomSpec(RoomType.EMPTY)

TEMPLATE_ROOMS: Dict[InstanceTemplate, RoomSpec] = {
    InstanceTemplate.RAIDS_LOBBY: RoomSpec(RoomType.START),
    InstanceTemplate.RAIDS_START: RoomSpec(RoomType.START),
    InstanceTemplate.RAIDS_END: RoomSpec(RoomType.END),
    InstanceTemplate.RAIDS_SCAVENGERS: RoomSpec(RoomType.SCAVENGERS),
    InstanceTemplate.RAIDS_SCAVENGERS2: RoomSpec(RoomType.SCAVENGERS),
    InstanceTemplate.RAIDS_FARMING: RoomSpec(RoomType.FARMING),
    InstanceTemplate.RAIDS_FARMING2: RoomSpec(RoomType.FARMING),

    # Combat
    InstanceTemplate.RAIDS_SHAMANS: RoomSpec(RoomType.COMBAT, boss=Boss.SHAMANS),
    InstanceTemplate.RAIDS_VASA: RoomSpec(RoomType.COMBAT, boss=Boss.VASA),
    InstanceTemplate.RAIDS_VANGUARDS: RoomSpec(RoomType.COMBAT, boss=Boss.VANGUARDS),
    InstanceTemplate.RAIDS_MUTTADILES: RoomSpec(RoomType.COMBAT, boss=Boss.MUTTADILES),
    InstanceTemplate.RAIDS_MYSTICS: RoomSpec(RoomType.COMBAT, boss=Boss.MYSTICS),
    InstanceTemplate.RAIDS_TEKTON: RoomSpec(RoomType.COMBAT, boss=Boss.TEKTON),
    InstanceTemplate.RAIDS_GUARDIANS: RoomSpec(RoomType.COMBAT, boss=Boss.GUARDIANS),
    InstanceTemplate.RAIDS_VESPULA: RoomSpec(RoomType.COMBAT, boss=Boss.VESPULA),

    # Puzzles
    InstanceTemplate.RAIDS_ICE_DEMON: RoomSpec(RoomType.PUZZLE, puzzle=Puzzle.ICE_DEMON),
    InstanceTemplate.RAIDS_THIEVING: RoomSpec(RoomType.PUZZLE, puzzle=Puzzle.THIEVING),
    InstanceTemplate.RAIDS_TIGHTROPE: RoomSpec(RoomType.PUZZLE, puzzle=Puzzle.TIGHTROPE),
    InstanceTemplate.RAIDS_CRABS: RoomSpec(RoomType.PUZZLE, puzzle=Puzzle.CRABS),
}


def _check_template_table() -> None:
    missing = [t.name for t in InstanceTemplate if t not in TEMPLATE_ROOMS]
    if missing:
        raise ValueError(f"TEMPLATE_ROOMS has no entry for: {', '.join(missing)}")


_check_template_table()
