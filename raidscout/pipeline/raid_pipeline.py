"""
Raid Pipeline
=============

The full reconstruction: Snapshot -> Scan -> Classify -> Encode -> Match -> Solve

RaidPipeline is a pure function of the snapshot: building twice from the
same snapshot yields equal Raid objects.

RaidTracker owns the "current raid" for an event-driven host. It rebuilds
exactly once per instance-entry transition and drops the raid when the player
leaves (unless scout_overlay_at_bank keeps it) or leaves the raid party.

Usage:
    pipeline = RaidPipeline.from_config(ScoutConfig())
    raid = pipeline.build(snapshot)
    if raid is not None:
        print(raid.code, raid.layout, raid.rotation_string)
"""

import logging
from typing import Optional

from raidscout.core.models import Raid
from raidscout.data.grid_scanner import GridScanner
from raidscout.data.room_classifier import RoomClassifier
from raidscout.data.snapshot import TileSnapshot
from raidscout.evaluation.rotation_filter import rotation_matches
from raidscout.layout.catalog import LayoutCatalog
from raidscout.layout.encoder import encode_layout
from raidscout.layout.matcher import LayoutMatcher
from raidscout.solver.rotation_solver import RotationSolver
from raidscout.utils.config import ScoutConfig

logger = logging.getLogger(__name__)


class RaidPipeline:
    """Composes the five reconstruction stages."""

    def __init__(self,
                 scanner: Optional[GridScanner] = None,
                 classifier: Optional[RoomClassifier] = None,
                 matcher: Optional[LayoutMatcher] = None,
                 solver: Optional[RotationSolver] = None):
        self.scanner = scanner or GridScanner()
        self.classifier = classifier or RoomClassifier()
        self.matcher = matcher or LayoutMatcher()
        self.solver = solver or RotationSolver()

    @classmethod
    def from_config(cls, config: ScoutConfig) -> 'RaidPipeline':
        catalog = LayoutCatalog.load(config.layouts_path) if config.layouts_path else None
        return cls(
            scanner=GridScanner(policy=config.boundary),
            matcher=LayoutMatcher(catalog),
        )

    def build(self, snapshot: TileSnapshot) -> Optional[Raid]:
        """
        Reconstruct the raid contained in a snapshot.

        Args:
            snapshot: Scene captured on instance entry

        Returns:
            The Raid, or None when the snapshot is not a raid instance
            (no anchor, or no resolvable slots)
        """
        anchor = self.scanner.find_anchor(snapshot)
        if anchor is None:
            logger.debug("Anchor not found; not inside a raid")
            return None

        slots = self.scanner.scan(snapshot, anchor)
        if not slots:
            logger.debug(f"No chamber slots resolved around anchor {anchor}")
            return None

        rooms = self.classifier.classify_all(snapshot, slots)
        code = encode_layout(rooms)

        layout = self.matcher.find_layout(code)
        if layout is None:
            logger.debug("Could not find layout match")

        solution = self.solver.solve(r for r in rooms.values() if r.boss is not None)

        raid = Raid(
            rooms=Raid.slots_from(rooms),
            code=code,
            layout=layout,
            rotation=solution.order,
        )
        logger.info(
            f"Built raid: {len(rooms)} rooms, code={code}, "
            f"layout={layout.name if layout else None}, rotation={raid.rotation_string}"
        )
        return raid


class RaidTracker:
    """
    Holds the current raid across instance-state events.

    The tracker is the only writer of `raid`; each rebuild replaces the value
    with a new immutable Raid.
    """

    def __init__(self,
                 pipeline: Optional[RaidPipeline] = None,
                 config: Optional[ScoutConfig] = None):
        self.config = config or ScoutConfig()
        self.pipeline = pipeline or RaidPipeline.from_config(self.config)
        self.in_raid = False
        self.raid: Optional[Raid] = None
        self.overlay_shown = False

    def update(self,
               in_raid: bool,
               snapshot: Optional[TileSnapshot] = None,
               in_party: bool = True) -> Optional[Raid]:
        """
        Process an instance-state change.

        Args:
            in_raid: Whether the player is now inside the raid instance
            snapshot: Scene to reconstruct from; required when entering
            in_party: False once the player has left the raid party

        Returns:
            The current raid after the update
        """
        if in_raid and not self.in_raid and snapshot is None:
            raise ValueError("A snapshot is required when entering the raid")

        if in_raid != self.in_raid:
            self.in_raid = in_raid

            if in_raid:
                self.raid = self.pipeline.build(snapshot)
                if self.raid is None:
                    logger.debug("Failed to build raid")
                self.overlay_shown = self.raid is not None and self.raid.layout is not None
            elif not self.config.scout_overlay_at_bank:
                self.overlay_shown = False
                self.raid = None

        if not in_party:
            self.overlay_shown = False
            self.raid = None

        return self.raid

    def rotation_matches(self) -> int:
        """Whitelist match count for the current raid's rotation."""
        return rotation_matches(self.raid, self.config.rotation_whitelist)
