"""
Tile Snapshots
==============

Read-only view of the loaded scene handed over by the world-state
collaborator for one reconstruction.

Storage (numpy, indexed [plane, x, y]):
- tiles:           bool   (PLANE_COUNT, SCENE_SIZE, SCENE_SIZE)   tile present
- wall_objects:    int32  (PLANE_COUNT, SCENE_SIZE, SCENE_SIZE)   wall object id or ABSENT
- template_chunks: int32  (PLANE_COUNT, CHUNKS_PER_SIDE, CHUNKS_PER_SIDE)
                          chunk template code or ABSENT
"""

import logging
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

import numpy as np

from raidscout.core.definitions import (
    ABSENT,
    CHUNK_SIZE,
    CHUNKS_PER_SIDE,
    PLANE_COUNT,
    SCENE_SIZE,
)
from raidscout.core.models import Tile
from raidscout.core.templates import InstanceTemplate, template_chunk

logger = logging.getLogger(__name__)

TILE_SHAPE: Tuple[int, int, int] = (PLANE_COUNT, SCENE_SIZE, SCENE_SIZE)
CHUNK_SHAPE: Tuple[int, int, int] = (PLANE_COUNT, CHUNKS_PER_SIDE, CHUNKS_PER_SIDE)


class TileSnapshot:
    """Immutable tile grid of every plane plus the chunk template codes."""

    def __init__(self,
                 tiles: np.ndarray,
                 wall_objects: np.ndarray,
                 template_chunks: np.ndarray):
        if tiles.shape != TILE_SHAPE:
            raise ValueError(f"tiles must have shape {TILE_SHAPE}, got {tiles.shape}")
        if wall_objects.shape != TILE_SHAPE:
            raise ValueError(f"wall_objects must have shape {TILE_SHAPE}, got {wall_objects.shape}")
        if template_chunks.shape != CHUNK_SHAPE:
            raise ValueError(f"template_chunks must have shape {CHUNK_SHAPE}, got {template_chunks.shape}")

        self._tiles = np.array(tiles, dtype=bool)
        self._wall_objects = np.array(wall_objects, dtype=np.int32)
        self._template_chunks = np.array(template_chunks, dtype=np.int32)
        for arr in (self._tiles, self._wall_objects, self._template_chunks):
            arr.setflags(write=False)

    @property
    def size(self) -> int:
        return SCENE_SIZE

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < SCENE_SIZE and 0 <= y < SCENE_SIZE

    def tile(self, plane: int, x: int, y: int) -> Optional[Tile]:
        """Tile at the position, or None if absent or outside the scene."""
        if not self.in_bounds(x, y) or not self._tiles[plane, x, y]:
            return None
        return Tile(plane, x, y)

    def wall_object(self, plane: int, x: int, y: int) -> Optional[int]:
        """Wall object id on a tile, None when the tile or the object is missing."""
        if self.tile(plane, x, y) is None:
            return None
        object_id = int(self._wall_objects[plane, x, y])
        return None if object_id == ABSENT else object_id

    def find_wall_objects(self, plane: int, object_id: int) -> List[Tile]:
        """Tiles of a plane carrying the wall object, x outer, y inner."""
        hits = np.argwhere(self._tiles[plane] & (self._wall_objects[plane] == object_id))
        return [Tile(plane, int(x), int(y)) for x, y in hits]

    def template_chunk(self, plane: int, chunk_x: int, chunk_y: int) -> int:
        """Chunk template code of an 8x8 block (ABSENT when not instanced)."""
        if not (0 <= chunk_x < CHUNKS_PER_SIDE and 0 <= chunk_y < CHUNKS_PER_SIDE):
            return ABSENT
        return int(self._template_chunks[plane, chunk_x, chunk_y])

    def chunk_for(self, tile: Tile) -> int:
        """Chunk template code of the block containing a tile."""
        x, y = tile.region_location
        return self.template_chunk(tile.plane, x // CHUNK_SIZE, y // CHUNK_SIZE)

    def tiles_on(self, plane: int) -> Iterator[Tile]:
        """Present tiles of one plane, x outer, y inner."""
        for x, y in zip(*np.nonzero(self._tiles[plane])):
            yield Tile(plane, int(x), int(y))

    # ------------------------------------------
    # Persistence
    # ------------------------------------------

    def save_npz(self, path: Union[str, Path]) -> None:
        np.savez_compressed(
            path,
            tiles=self._tiles,
            wall_objects=self._wall_objects,
            template_chunks=self._template_chunks,
        )

    @classmethod
    def load_npz(cls, path: Union[str, Path]) -> 'TileSnapshot':
        """Load a snapshot written by save_npz."""
        with np.load(path) as data:
            missing = {'tiles', 'wall_objects', 'template_chunks'} - set(data.files)
            if missing:
                raise ValueError(f"Snapshot file {path} is missing arrays: {sorted(missing)}")
            snapshot = cls(data['tiles'], data['wall_objects'], data['template_chunks'])
        logger.debug("Loaded snapshot from %s", path)
        return snapshot

    def __eq__(self, other):
        if not isinstance(other, TileSnapshot):
            return NotImplemented
        return (np.array_equal(self._tiles, other._tiles)
                and np.array_equal(self._wall_objects, other._wall_objects)
                and np.array_equal(self._template_chunks, other._template_chunks))

    __hash__ = None


class TileSnapshotBuilder:
    """
    Mutable helper for assembling snapshots in code.

    Example:
        >>> builder = TileSnapshotBuilder()
        >>> builder.fill_block(3, 40, 40, 32)
        >>> builder.place_wall_object(3, 40, 40, ANCHOR_OBJECT_ID)
        >>> snapshot = builder.build()
    """

    def __init__(self):
        self.tiles = np.zeros(TILE_SHAPE, dtype=bool)
        self.wall_objects = np.full(TILE_SHAPE, ABSENT, dtype=np.int32)
        self.template_chunks = np.full(CHUNK_SHAPE, ABSENT, dtype=np.int32)

    def set_tile(self, plane: int, x: int, y: int, present: bool = True) -> 'TileSnapshotBuilder':
        self.tiles[plane, x, y] = present
        return self

    def fill_block(self, plane: int, x: int, y: int, size: int) -> 'TileSnapshotBuilder':
        """Mark a size x size block starting at (x, y) as present, clipped to the scene."""
        x0, y0 = max(x, 0), max(y, 0)
        x1, y1 = min(x + size, SCENE_SIZE), min(y + size, SCENE_SIZE)
        if x0 < x1 and y0 < y1:
            self.tiles[plane, x0:x1, y0:y1] = True
        return self

    def place_wall_object(self, plane: int, x: int, y: int, object_id: int) -> 'TileSnapshotBuilder':
        self.tiles[plane, x, y] = True
        self.wall_objects[plane, x, y] = object_id
        return self

    def set_chunk(self, plane: int, chunk_x: int, chunk_y: int, code: int) -> 'TileSnapshotBuilder':
        self.template_chunks[plane, chunk_x, chunk_y] = code
        return self

    def set_template(self, plane: int, x: int, y: int,
                     template: InstanceTemplate, rotation: int = 0) -> 'TileSnapshotBuilder':
        """Point the chunk containing tile (x, y) at a template."""
        return self.set_chunk(plane, x // CHUNK_SIZE, y // CHUNK_SIZE,
                              template_chunk(template, rotation))

    def build(self) -> TileSnapshot:
        return TileSnapshot(self.tiles, self.wall_objects, self.template_chunks)
