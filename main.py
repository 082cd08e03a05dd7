"""
RAIDSCOUT - Main Entry Point
============================
The pipeline: Load snapshot -> Reconstruct -> Match -> Solve -> Score

Usage:
    # Reconstruct a raid from a saved snapshot
    python main.py snapshot.npz

    # With user settings (whitelists, boundary policy, catalog override)
    python main.py snapshot.npz --config scout.json

    # Debug output
    python main.py snapshot.npz --verbose

"""

import argparse
import sys
import logging
from typing import Optional

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

from raidscout.core.definitions import FLOOR_COUNT
from raidscout.core.models import Raid
from raidscout.data.snapshot import TileSnapshot
from raidscout.evaluation.rotation_filter import rotation_matches
from raidscout.pipeline.raid_pipeline import RaidPipeline
from raidscout.utils.config import ScoutConfig, is_layout_whitelisted


def visualize_raid(raid: Raid) -> str:
    """One line per floor, one cell per slot ('?' for unresolved slots)."""
    lines = []
    for floor in range(FLOOR_COUNT):
        cells = [room.name if room is not None else '?' for room in raid.floor(floor)]
        lines.append(f"  Floor {floor}: " + ' | '.join(f"{c:<10}" for c in cells))
    return '\n'.join(lines)


def run_pipeline(snapshot_path: str, config: ScoutConfig) -> Optional[Raid]:
    """
    Reconstruct and report the raid stored in a snapshot file.

    Returns:
        The Raid, or None if the snapshot does not contain one
    """
    print(f"\n{'='*60}")
    print(f"RAIDSCOUT: {snapshot_path}")
    print(f"{'='*60}")

    logger.info("[STEP 1] Loading snapshot...")
    try:
        snapshot = TileSnapshot.load_npz(snapshot_path)
    except FileNotFoundError as e:
        logger.error(f"Snapshot not found: {e}")
        raise

    logger.info("[STEP 2] Reconstructing raid...")
    raid = RaidPipeline.from_config(config).build(snapshot)
    if raid is None:
        print("  ✗ Not inside a raid (anchor or slots not found)")
        return None

    print(f"\n[STEP 2] Reconstructed {sum(1 for _ in raid.present_rooms())} rooms")
    print(visualize_raid(raid))
    print(f"  ✓ Code: {raid.code}")

    print("\n[STEP 3] Layout")
    if raid.layout is not None:
        whitelisted = is_layout_whitelisted(raid, config.layout_whitelist)
        print(f"  ✓ {raid.layout.name}{' (whitelisted)' if whitelisted else ''}")
    else:
        print("  ✗ No layout match")

    print("\n[STEP 4] Rotation")
    print(f"  ✓ {raid.rotation_string or '(no combat rooms)'}")
    print(f"  ✓ Whitelist matches: {rotation_matches(raid, config.rotation_whitelist)}")
    return raid


def main():
    parser = argparse.ArgumentParser(
        description='Raidscout - reconstruct raid layouts from tile snapshots'
    )
    parser.add_argument('snapshot', help='Snapshot file (.npz) written by TileSnapshot.save_npz')
    parser.add_argument('--config', '-c', help='Scout settings (JSON)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable DEBUG logging')
    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    config = ScoutConfig.load(args.config) if args.config else ScoutConfig()
    raid = run_pipeline(args.snapshot, config)
    return 0 if raid is not None else 1


if __name__ == '__main__':
    sys.exit(main())
