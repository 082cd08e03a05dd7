"""
Grid Scanner
============

Stage 1 of the pipeline: locate the anchor marker on the lobby plane and
enumerate the chamber slots around it.

Raid grid (per floor, in scene coordinates):
- Chambers are ROOM_MAX_SIZE x ROOM_MAX_SIZE blocks
- Rows sit at anchor.y + r * ROOM_MAX_SIZE for r in (1, 0, -1)
- Columns sit at anchor.x + c * ROOM_MAX_SIZE for c in [start column, 4)
- Each floor holds up to SLOTS_PER_FLOOR slots; floor f lives on
  plane LOBBY_PLANE - f

Slot numbering is a running counter per floor that only advances on cells
resolving to a tile. The boundary handling (negative columns, columns past
the scene edge, row breaks) was inferred from observed scenes, so every rule
is switchable through BoundaryPolicy.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from raidscout.core.definitions import (
    ANCHOR_OBJECT_ID,
    FLOOR_COUNT,
    LOBBY_PLANE,
    ROOM_MAX_SIZE,
    SCENE_SIZE,
    SLOTS_PER_FLOOR,
)
from raidscout.core.models import Tile
from raidscout.data.snapshot import TileSnapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoundaryPolicy:
    """
    Rules for grid cells near the scene boundary.

    Attributes:
        edge_column: Scene x used for cells left of the scene (x < 0). The
            tile at x=0 is usually missing from snapshots, so the default
            reads x=1 instead. None skips such cells. With the anchor at
            x < 2 * room size both negative columns read the same edge
            tile, so two slots share one base tile (and classification).
        scene_edge_slots: (low, high) exclusive counter range in which a cell
            right of the scene advances the counter. None disables it.
        row_break_slot: Counter value at which a missing tile consumes the
            slot and ends the row. None disables it.
    """
    edge_column: Optional[int] = 1
    scene_edge_slots: Optional[Tuple[int, int]] = (1, 4)
    row_break_slot: Optional[int] = 4


class GridScanner:
    """
    Anchor search and slot enumeration over a TileSnapshot.

    The scanner is stateless between calls; the same snapshot always
    produces the same slot mapping.
    """

    ROW_OFFSETS: Tuple[int, ...] = (1, 0, -1)
    FIRST_COLUMN: int = -2
    COLUMN_END: int = 4  # exclusive

    def __init__(self,
                 policy: Optional[BoundaryPolicy] = None,
                 floor_count: int = FLOOR_COUNT,
                 lobby_plane: int = LOBBY_PLANE,
                 anchor_object_id: int = ANCHOR_OBJECT_ID,
                 room_size: int = ROOM_MAX_SIZE,
                 slots_per_floor: int = SLOTS_PER_FLOOR):
        self.policy = policy or BoundaryPolicy()
        self.floor_count = floor_count
        self.lobby_plane = lobby_plane
        self.anchor_object_id = anchor_object_id
        self.room_size = room_size
        self.slots_per_floor = slots_per_floor

    def find_anchor(self, snapshot: TileSnapshot) -> Optional[Tuple[int, int]]:
        """
        Find the anchor marker on the lobby plane.

        Tiles are visited x outer, y inner; the first marker wins.

        Returns:
            (x, y) of the anchor, or None when not inside the instance
        """
        markers = snapshot.find_wall_objects(self.lobby_plane, self.anchor_object_id)
        if not markers:
            return None
        return markers[0].region_location

    def scan(self, snapshot: TileSnapshot, anchor: Tuple[int, int]) -> Dict[int, Tile]:
        """
        Enumerate chamber slots around the anchor.

        Args:
            snapshot: Scene to read
            anchor: (x, y) returned by find_anchor

        Returns:
            Dict mapping global slot index (floor * slots_per_floor + slot)
            -> base Tile. Unresolved slots are absent.
        """
        base_x, base_y = anchor
        slots: Dict[int, Tile] = {}
        start_column = self.FIRST_COLUMN

        for floor in range(self.floor_count):
            plane = self.lobby_plane - floor
            if plane < 0:
                break

            # Slot 0 is west of the anchor unless the room east of it is missing
            east = snapshot.tile(plane, base_x + self.room_size, base_y)
            position = 1 if east is None else 0
            found = 0

            for row in self.ROW_OFFSETS:
                if position >= self.slots_per_floor:
                    break
                y = base_y + row * self.room_size

                for column in range(start_column, self.COLUMN_END):
                    if position >= self.slots_per_floor:
                        break
                    x = base_x + column * self.room_size
                    position = self._advance_past_edge(x, position)

                    lookup_x = x
                    if x < 0:
                        if self.policy.edge_column is None:
                            continue
                        lookup_x = self.policy.edge_column

                    if x >= SCENE_SIZE or not (0 <= y < SCENE_SIZE):
                        continue

                    tile = snapshot.tile(plane, lookup_x, y)
                    if tile is None:
                        if self.policy.row_break_slot is not None and position == self.policy.row_break_slot:
                            position += 1
                            break
                        continue

                    if position == 0 and start_column != column:
                        start_column = column

                    slots[position + floor * self.slots_per_floor] = tile
                    position += 1
                    found += 1

            logger.debug("Floor %d (plane %d): resolved %d slots", floor, plane, found)

        return slots

    def _advance_past_edge(self, x: int, position: int) -> int:
        edge = self.policy.scene_edge_slots
        if edge is not None and x > SCENE_SIZE and edge[0] < position < edge[1]:
            return position + 1
        return position
