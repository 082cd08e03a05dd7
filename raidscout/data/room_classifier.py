"""
Room Classifier
===============

Stage 2 of the pipeline: turn a slot's base tile into a typed Room.

The chunk template code under the tile is resolved to an InstanceTemplate and
looked up in TEMPLATE_ROOMS. Outcomes:
- no chunk code           -> EMPTY room (slot is not instanced)
- code, no template match -> EMPTY room + data-integrity warning
- template                -> table entry
"""

import logging
from typing import Dict

from raidscout.core.definitions import SLOTS_PER_FLOOR, ABSENT
from raidscout.core.models import Room, Tile
from raidscout.core.templates import EMPTY_SPEC, TEMPLATE_ROOMS, InstanceTemplate, RoomSpec
from raidscout.data.snapshot import TileSnapshot

logger = logging.getLogger(__name__)


class RoomClassifier:
    """Classifies base tiles using the static template table."""

    def __init__(self, table: Dict[InstanceTemplate, RoomSpec] = TEMPLATE_ROOMS):
        self.table = table

    def resolve(self, snapshot: TileSnapshot, tile: Tile) -> RoomSpec:
        """Classification for the chunk under a tile."""
        chunk = snapshot.chunk_for(tile)
        if chunk == ABSENT:
            return EMPTY_SPEC

        template = InstanceTemplate.find_match(chunk)
        if template is None:
            logger.warning(
                f"Unrecognized chunk template {chunk:#x} at plane {tile.plane} "
                f"({tile.x}, {tile.y}); treating room as empty"
            )
            return EMPTY_SPEC

        spec = self.table.get(template)
        if spec is None:
            logger.warning(f"Template {template.name} has no room classification; treating room as empty")
            return EMPTY_SPEC
        return spec

    def classify(self, snapshot: TileSnapshot, tile: Tile, index: int) -> Room:
        """
        Classify the room whose base tile sits at a global slot index.

        Args:
            snapshot: Scene the tile belongs to
            tile: Base tile returned by the grid scanner
            index: Global slot index (floor * 8 + slot)
        """
        spec = self.resolve(snapshot, tile)
        floor, slot = divmod(index, SLOTS_PER_FLOOR)
        return Room(
            floor=floor,
            slot=slot,
            base=tile,
            type=spec.type,
            boss=spec.boss,
            puzzle=spec.puzzle,
        )

    def classify_all(self, snapshot: TileSnapshot, slots: Dict[int, Tile]) -> Dict[int, Room]:
        """Classify every slot of a scan result."""
        return {index: self.classify(snapshot, tile, index)
                for index, tile in sorted(slots.items())}
