"""
Tests for tile snapshots and the raid data classes.
"""

import numpy as np
import pytest

from raidscout.core.definitions import (
    ABSENT,
    ANCHOR_OBJECT_ID,
    CHUNKS_PER_SIDE,
    LOBBY_PLANE,
    PLANE_COUNT,
    SCENE_SIZE,
    TOTAL_SLOTS,
    Boss,
    Puzzle,
    RoomType,
)
from raidscout.core.models import Raid, Room, Tile
from raidscout.core.templates import InstanceTemplate, template_chunk
from raidscout.data.snapshot import TileSnapshot, TileSnapshotBuilder


BASE = Tile(LOBBY_PLANE, 1, 72)


class TestTileSnapshot:

    def test_tile_lookup(self):
        snapshot = TileSnapshotBuilder().set_tile(2, 10, 20).build()
        assert snapshot.tile(2, 10, 20) == Tile(2, 10, 20)
        assert snapshot.tile(3, 10, 20) is None
        assert snapshot.tile(2, -1, 20) is None
        assert snapshot.tile(2, 10, SCENE_SIZE) is None

    def test_wall_object(self):
        builder = TileSnapshotBuilder()
        builder.place_wall_object(LOBBY_PLANE, 5, 6, ANCHOR_OBJECT_ID)
        builder.set_tile(LOBBY_PLANE, 7, 7)
        snapshot = builder.build()

        assert snapshot.wall_object(LOBBY_PLANE, 5, 6) == ANCHOR_OBJECT_ID
        assert snapshot.wall_object(LOBBY_PLANE, 7, 7) is None
        assert snapshot.wall_object(LOBBY_PLANE, 8, 8) is None

    def test_find_wall_objects(self):
        builder = TileSnapshotBuilder()
        builder.place_wall_object(LOBBY_PLANE, 30, 2, ANCHOR_OBJECT_ID)
        builder.place_wall_object(LOBBY_PLANE, 4, 90, ANCHOR_OBJECT_ID)
        builder.place_wall_object(LOBBY_PLANE, 4, 10, ANCHOR_OBJECT_ID)
        builder.place_wall_object(LOBBY_PLANE, 5, 5, 999)
        builder.place_wall_object(2, 1, 1, ANCHOR_OBJECT_ID)
        snapshot = builder.build()

        assert [t.region_location for t in snapshot.find_wall_objects(LOBBY_PLANE, ANCHOR_OBJECT_ID)] == [
            (4, 10), (4, 90), (30, 2),
        ]
        assert snapshot.find_wall_objects(0, ANCHOR_OBJECT_ID) == []

    def test_wall_object_needs_tile(self):
        """A wall object id left on a missing tile is not reported."""
        builder = TileSnapshotBuilder()
        builder.place_wall_object(LOBBY_PLANE, 7, 7, ANCHOR_OBJECT_ID)
        builder.set_tile(LOBBY_PLANE, 7, 7, present=False)
        assert builder.build().find_wall_objects(LOBBY_PLANE, ANCHOR_OBJECT_ID) == []

    def test_chunk_lookup(self):
        builder = TileSnapshotBuilder()
        builder.set_template(LOBBY_PLANE, 41, 75, InstanceTemplate.RAIDS_VASA)
        snapshot = builder.build()

        assert snapshot.template_chunk(LOBBY_PLANE, 5, 9) == template_chunk(InstanceTemplate.RAIDS_VASA)
        assert snapshot.chunk_for(Tile(LOBBY_PLANE, 47, 72)) == template_chunk(InstanceTemplate.RAIDS_VASA)
        assert snapshot.chunk_for(Tile(LOBBY_PLANE, 48, 72)) == ABSENT
        assert snapshot.template_chunk(LOBBY_PLANE, CHUNKS_PER_SIDE, 0) == ABSENT

    def test_tiles_on_order(self):
        builder = TileSnapshotBuilder()
        for x, y in [(9, 1), (2, 50), (2, 3)]:
            builder.set_tile(0, x, y)
        assert [t.region_location for t in builder.build().tiles_on(0)] == [(2, 3), (2, 50), (9, 1)]

    def test_fill_block_clipped(self):
        snapshot = TileSnapshotBuilder().fill_block(1, 90, -4, 32).build()
        tiles = list(snapshot.tiles_on(1))
        assert len(tiles) == (SCENE_SIZE - 90) * 28
        assert snapshot.tile(1, 103, 27) is not None
        assert snapshot.tile(1, 89, 0) is None

    def test_read_only(self):
        snapshot = TileSnapshotBuilder().build()
        with pytest.raises(ValueError):
            snapshot._tiles[0, 0, 0] = True

    def test_builder_changes_do_not_leak(self):
        builder = TileSnapshotBuilder()
        snapshot = builder.build()
        builder.set_tile(0, 1, 1)
        assert snapshot.tile(0, 1, 1) is None

    def test_shape_validation(self):
        tiles = np.zeros((PLANE_COUNT, SCENE_SIZE, SCENE_SIZE), dtype=bool)
        walls = np.full_like(tiles, ABSENT, dtype=np.int32)
        chunks = np.full((PLANE_COUNT, CHUNKS_PER_SIDE, CHUNKS_PER_SIDE), ABSENT, dtype=np.int32)

        with pytest.raises(ValueError):
            TileSnapshot(tiles[:3], walls, chunks)
        with pytest.raises(ValueError):
            TileSnapshot(tiles, walls, chunks[:, :12])

    def test_load_missing_arrays(self, tmp_path):
        path = tmp_path / 'broken.npz'
        np.savez_compressed(path, tiles=np.zeros((PLANE_COUNT, SCENE_SIZE, SCENE_SIZE), dtype=bool))
        with pytest.raises(ValueError, match='missing'):
            TileSnapshot.load_npz(path)


class TestRoom:

    def test_name(self):
        assert Room(0, 0, BASE, RoomType.START).name == 'Start'
        assert Room(0, 1, BASE, RoomType.COMBAT, boss=Boss.VASA).name == 'Vasa'
        assert Room(0, 2, BASE, RoomType.PUZZLE, puzzle=Puzzle.ICE_DEMON).name == 'Ice Demon'

    def test_index(self):
        assert Room(2, 3, BASE, RoomType.EMPTY).index == 19

    @pytest.mark.parametrize("kwargs", [
        dict(type=RoomType.COMBAT),
        dict(type=RoomType.PUZZLE),
        dict(type=RoomType.FARMING, boss=Boss.VASA),
        dict(type=RoomType.COMBAT, boss=Boss.VASA, puzzle=Puzzle.CRABS),
        dict(type=RoomType.EMPTY, puzzle=Puzzle.CRABS),
    ])
    def test_variant_invariant(self, kwargs):
        with pytest.raises(ValueError):
            Room(0, 0, BASE, **kwargs)

    @pytest.mark.parametrize("floor,slot", [(-1, 0), (3, 0), (0, 8)])
    def test_position_range(self, floor, slot):
        with pytest.raises(ValueError):
            Room(floor, slot, BASE, RoomType.EMPTY)


class TestRaid:

    def test_slot_count(self):
        with pytest.raises(ValueError):
            Raid(rooms=(None,) * (TOTAL_SLOTS - 1), code='')

    def test_index_mismatch(self):
        rooms = [None] * TOTAL_SLOTS
        rooms[3] = Room(0, 4, BASE, RoomType.EMPTY)
        with pytest.raises(ValueError):
            Raid(rooms=tuple(rooms), code='')

    def test_accessors(self):
        shamans = Room(1, 2, BASE, RoomType.COMBAT, boss=Boss.SHAMANS)
        crabs = Room(0, 5, BASE, RoomType.PUZZLE, puzzle=Puzzle.CRABS)
        raid = Raid(rooms=Raid.slots_from({10: shamans, 5: crabs}), code='')

        assert raid.room(1, 2) is shamans
        assert raid.floor(0)[5] is crabs
        assert len(raid.floor(2)) == 8
        assert list(raid.present_rooms()) == [crabs, shamans]
        assert raid.combat_rooms == [shamans]
        assert raid.puzzle_rooms == [crabs]
        assert raid.rotation_string is None
