"""
Raid Data Classes
=================

Immutable result types shared by every stage of the pipeline:

- Tile:   reference to one tile of a snapshot (plane, x, y)
- Room:   a classified chamber slot
- Layout: an entry of the layout catalog
- Raid:   the reconstructed instance (24 sparse slots + derived data)
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from raidscout.core.definitions import (
    FLOOR_COUNT,
    SLOTS_PER_FLOOR,
    TOTAL_SLOTS,
    Boss,
    Puzzle,
    RoomType,
)


@dataclass(frozen=True)
class Tile:
    """A tile of the loaded scene."""
    plane: int
    x: int
    y: int

    @property
    def region_location(self) -> Tuple[int, int]:
        """(x, y) within the scene."""
        return (self.x, self.y)


@dataclass(frozen=True)
class Room:
    """
    A single chamber slot.

    `boss` is set iff the room is COMBAT and `puzzle` iff it is PUZZLE;
    construction fails otherwise.
    """
    floor: int
    slot: int
    base: Tile
    type: RoomType
    boss: Optional[Boss] = None
    puzzle: Optional[Puzzle] = None

    def __post_init__(self):
        if not (0 <= self.floor < FLOOR_COUNT and 0 <= self.slot < SLOTS_PER_FLOOR):
            raise ValueError(f"Room position out of range: floor={self.floor} slot={self.slot}")
        if (self.boss is not None) != (self.type is RoomType.COMBAT):
            raise ValueError(f"Room boss must be set iff type is COMBAT (got {self.type}, {self.boss})")
        if (self.puzzle is not None) != (self.type is RoomType.PUZZLE):
            raise ValueError(f"Room puzzle must be set iff type is PUZZLE (got {self.type}, {self.puzzle})")

    @property
    def index(self) -> int:
        """Position in the 24-slot traversal order."""
        return self.floor * SLOTS_PER_FLOOR + self.slot

    @property
    def name(self) -> str:
        """Boss or puzzle name when present, otherwise the type name."""
        if self.boss is not None:
            return self.boss.display_name
        if self.puzzle is not None:
            return self.puzzle.display_name
        return self.type.display_name


@dataclass(frozen=True)
class Layout:
    """A known layout: display name and code pattern."""
    name: str
    code: str


@dataclass(frozen=True)
class Raid:
    """
    A reconstructed raid.

    rooms is always TOTAL_SLOTS long; slots that could not be resolved
    are None (not EMPTY rooms).
    """
    rooms: Tuple[Optional[Room], ...]
    code: str
    layout: Optional[Layout] = None
    rotation: Tuple[Room, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if len(self.rooms) != TOTAL_SLOTS:
            raise ValueError(f"Raid needs {TOTAL_SLOTS} slots, got {len(self.rooms)}")
        for index, room in enumerate(self.rooms):
            if room is not None and room.index != index:
                raise ValueError(f"Room at slot {index} reports index {room.index}")

    @staticmethod
    def slots_from(rooms: Dict[int, Room]) -> Tuple[Optional[Room], ...]:
        """Build the sparse slot tuple from an index -> Room mapping."""
        return tuple(rooms.get(i) for i in range(TOTAL_SLOTS))

    def room(self, floor: int, slot: int) -> Optional[Room]:
        return self.rooms[floor * SLOTS_PER_FLOOR + slot]

    def floor(self, floor: int) -> Tuple[Optional[Room], ...]:
        start = floor * SLOTS_PER_FLOOR
        return self.rooms[start:start + SLOTS_PER_FLOOR]

    def present_rooms(self) -> Iterator[Room]:
        return (r for r in self.rooms if r is not None)

    @property
    def combat_rooms(self) -> List[Room]:
        """Combat rooms in traversal order (floor, then slot)."""
        return [r for r in self.present_rooms() if r.type is RoomType.COMBAT]

    @property
    def puzzle_rooms(self) -> List[Room]:
        return [r for r in self.present_rooms() if r.type is RoomType.PUZZLE]

    @property
    def rotation_string(self) -> Optional[str]:
        """Boss names in encounter order, e.g. 'Tekton, Vasa'. None if unsolved."""
        if not self.rotation:
            return None
        return ', '.join(r.boss.display_name for r in self.rotation)
