"""
End-to-end Tests for the Raid Pipeline
======================================

Snapshot -> Scan -> Classify -> Encode -> Match -> Solve, plus the
instance-state tracker.
"""

import json

import pytest

from raidscout.core.definitions import Boss, RoomType
from raidscout.core.templates import InstanceTemplate
from raidscout.data.snapshot import TileSnapshot
from raidscout.layout.catalog import LayoutCatalog
from raidscout.pipeline.raid_pipeline import RaidPipeline, RaidTracker
from raidscout.utils.config import ScoutConfig

from conftest import REFERENCE_CODE, REFERENCE_FLOOR, make_snapshot


class TestRaidPipeline:
    """RaidPipeline.build"""

    def test_reference_raid(self, reference_snapshot):
        raid = RaidPipeline().build(reference_snapshot)

        assert raid is not None
        assert raid.code == REFERENCE_CODE
        assert raid.layout.name == 'SCPFC.CSPCF'
        assert raid.rotation_string == 'Shamans, Tekton'
        assert [room.index for room in raid.present_rooms()] == list(range(8))
        assert all(room is None for room in raid.rooms[8:])

    def test_rooms_match_grid(self, reference_snapshot):
        raid = RaidPipeline().build(reference_snapshot)

        assert raid.room(0, 0).type is RoomType.START
        assert raid.room(0, 2).boss is Boss.SHAMANS
        assert raid.room(0, 6).type is RoomType.EMPTY
        assert raid.room(0, 7).type is RoomType.END
        assert [r.name for r in raid.puzzle_rooms] == ['Crabs']

    def test_idempotent(self, reference_snapshot):
        pipeline = RaidPipeline()
        assert pipeline.build(reference_snapshot) == pipeline.build(reference_snapshot)

    def test_no_anchor(self):
        snapshot = make_snapshot({0: REFERENCE_FLOOR}, anchor=False)
        assert RaidPipeline().build(snapshot) is None

    def test_empty_snapshot(self, empty_snapshot):
        assert RaidPipeline().build(empty_snapshot) is None

    def test_rotation_reordered_by_constraints(self):
        floor = list(REFERENCE_FLOOR)
        floor[2] = InstanceTemplate.RAIDS_VASA
        raid = RaidPipeline().build(make_snapshot({0: floor}))

        assert raid.code.startswith('#-S-CAPCF-CT.-$-')
        assert raid.rotation_string == 'Tekton, Vasa'

    def test_rotation_without_layout(self):
        """An unknown layout still gets a rotation."""
        floor = list(REFERENCE_FLOOR)
        floor[1] = InstanceTemplate.RAIDS_GUARDIANS
        raid = RaidPipeline().build(make_snapshot({0: floor}))

        assert raid.layout is None
        assert raid.rotation_string == 'Guardians, Shamans, Tekton'

    def test_two_floors(self):
        second = [
            InstanceTemplate.RAIDS_START,
            InstanceTemplate.RAIDS_VASA,
            InstanceTemplate.RAIDS_SCAVENGERS2,
            InstanceTemplate.RAIDS_THIEVING,
            InstanceTemplate.RAIDS_MYSTICS,
            InstanceTemplate.RAIDS_FARMING2,
            None,
            InstanceTemplate.RAIDS_END,
        ]
        raid = RaidPipeline().build(make_snapshot({0: REFERENCE_FLOOR, 1: second}))

        assert raid.code.split('|')[1] == '#-CAS-PHCYF-.-$-'
        assert raid.layout.name == 'SCPFC.CSPCF'
        assert raid.rotation_string == 'Shamans, Tekton, Vasa, Mystics'

    def test_from_config_catalog_override(self, tmp_path, reference_snapshot):
        unknown = '????????????????'
        path = tmp_path / 'layouts.json'
        path.write_text(json.dumps({'layouts': [
            {'name': 'mine', 'code': f'#-S-C?P?F-C?.-$-|{unknown}|{unknown}'},
        ]}), encoding='utf-8')

        raid = RaidPipeline.from_config(ScoutConfig(layouts_path=str(path))).build(reference_snapshot)
        assert raid.layout.name == 'mine'

    def test_snapshot_file_round_trip(self, tmp_path, reference_snapshot):
        path = tmp_path / 'raid.npz'
        reference_snapshot.save_npz(path)
        loaded = TileSnapshot.load_npz(path)

        assert loaded == reference_snapshot
        assert RaidPipeline().build(loaded).code == REFERENCE_CODE


class TestRaidTracker:
    """Instance-state transitions."""

    def test_enter_builds_raid(self, reference_snapshot):
        tracker = RaidTracker()
        raid = tracker.update(in_raid=True, snapshot=reference_snapshot)

        assert raid is tracker.raid
        assert raid.code == REFERENCE_CODE
        assert tracker.overlay_shown

    def test_rebuild_once_per_entry(self, reference_snapshot, monkeypatch):
        tracker = RaidTracker()
        calls = []
        build = tracker.pipeline.build
        monkeypatch.setattr(tracker.pipeline, 'build', lambda s: calls.append(s) or build(s))

        tracker.update(in_raid=True, snapshot=reference_snapshot)
        tracker.update(in_raid=True, snapshot=reference_snapshot)
        assert len(calls) == 1

        tracker.update(in_raid=False)
        tracker.update(in_raid=True, snapshot=reference_snapshot)
        assert len(calls) == 2

    def test_leave_clears_raid(self, reference_snapshot):
        tracker = RaidTracker()
        tracker.update(in_raid=True, snapshot=reference_snapshot)
        assert tracker.update(in_raid=False) is None
        assert not tracker.overlay_shown

    def test_overlay_at_bank_keeps_raid(self, reference_snapshot):
        tracker = RaidTracker(config=ScoutConfig(scout_overlay_at_bank=True))
        raid = tracker.update(in_raid=True, snapshot=reference_snapshot)
        assert tracker.update(in_raid=False) is raid
        assert tracker.overlay_shown

    def test_leaving_party_clears_raid(self, reference_snapshot):
        tracker = RaidTracker(config=ScoutConfig(scout_overlay_at_bank=True))
        tracker.update(in_raid=True, snapshot=reference_snapshot)
        assert tracker.update(in_raid=False, in_party=False) is None
        assert not tracker.overlay_shown

    def test_entry_requires_snapshot(self):
        with pytest.raises(ValueError):
            RaidTracker().update(in_raid=True)

    def test_failed_entry_leaves_state_unchanged(self, reference_snapshot):
        """A rejected entry is not a transition; the next entry still builds."""
        tracker = RaidTracker()
        with pytest.raises(ValueError):
            tracker.update(in_raid=True)
        assert tracker.in_raid is False

        raid = tracker.update(in_raid=True, snapshot=reference_snapshot)
        assert raid is not None
        assert raid.code == REFERENCE_CODE

    def test_no_overlay_without_layout(self):
        floor = list(REFERENCE_FLOOR)
        floor[1] = InstanceTemplate.RAIDS_GUARDIANS
        tracker = RaidTracker()
        raid = tracker.update(in_raid=True, snapshot=make_snapshot({0: floor}))

        assert raid is not None
        assert not tracker.overlay_shown

    def test_rotation_matches(self, reference_snapshot):
        config = ScoutConfig(whitelisted_rotations='[Shamans, Tekton, Vasa] [Shamans, Tekton]')
        tracker = RaidTracker(config=config)
        assert tracker.rotation_matches() == 0

        tracker.update(in_raid=True, snapshot=reference_snapshot)
        assert tracker.rotation_matches() == 2
