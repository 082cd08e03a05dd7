"""
Raidscout Pipeline Module
=========================

End-to-end reconstruction and the event-driven raid tracker.

Usage:
    from raidscout.pipeline import RaidPipeline, RaidTracker

    tracker = RaidTracker()
    raid = tracker.update(in_raid=True, snapshot=snapshot)
"""

from raidscout.pipeline.raid_pipeline import RaidPipeline, RaidTracker

__all__ = [
    'RaidPipeline',
    'RaidTracker',
]
