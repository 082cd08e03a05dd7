"""
Shared pytest fixtures for the raidscout test suite.

Scene layout used by the fixtures (anchor at x=40, y=40):

    row y=72:  slot 0 (x=1)  slot 1 (x=8)  slot 2 (x=40)  slot 3 (x=72)
    row y=40:  slot 4 (x=1)  slot 5 (x=8)  slot 6 (x=40)  slot 7 (x=72)

x=1 is where the scanner reads cells that fall left of the scene (x=-24).
Floor f lives on plane 3 - f.
"""

import sys
from pathlib import Path
from typing import Dict, Optional, Sequence

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from raidscout.core.definitions import ANCHOR_OBJECT_ID, LOBBY_PLANE
from raidscout.core.templates import InstanceTemplate
from raidscout.data.snapshot import TileSnapshot, TileSnapshotBuilder

ANCHOR = (40, 40)

SLOT_CELLS = [
    (1, 72), (8, 72), (40, 72), (72, 72),
    (1, 40), (8, 40), (40, 40), (72, 40),
]

# Floor 0 of the reference raid: Start -> Scavengers -> Shamans -> Crabs ->
# Farming -> Tekton -> (empty) -> End
REFERENCE_FLOOR = [
    InstanceTemplate.RAIDS_START,
    InstanceTemplate.RAIDS_SCAVENGERS,
    InstanceTemplate.RAIDS_SHAMANS,
    InstanceTemplate.RAIDS_CRABS,
    InstanceTemplate.RAIDS_FARMING,
    InstanceTemplate.RAIDS_TEKTON,
    None,
    InstanceTemplate.RAIDS_END,
]

REFERENCE_CODE = (
    '#-S-CSPCF-CT.-$-'
    '|????????????????'
    '|????????????????'
)


def make_builder(floors: Dict[int, Sequence[Optional[InstanceTemplate]]],
                 anchor: bool = True) -> TileSnapshotBuilder:
    """
    Builder with one tile per slot cell on every listed floor.

    A None template leaves the cell's chunk uninstanced (EMPTY room).
    """
    builder = TileSnapshotBuilder()
    for floor, templates in floors.items():
        plane = LOBBY_PLANE - floor
        for (x, y), template in zip(SLOT_CELLS, templates):
            builder.set_tile(plane, x, y)
            if template is not None:
                builder.set_template(plane, x, y, template)
    if anchor:
        builder.place_wall_object(LOBBY_PLANE, ANCHOR[0], ANCHOR[1], ANCHOR_OBJECT_ID)
    return builder


def make_snapshot(floors: Dict[int, Sequence[Optional[InstanceTemplate]]],
                  anchor: bool = True) -> TileSnapshot:
    return make_builder(floors, anchor=anchor).build()


# =============================================================================
# Snapshot Fixtures
# =============================================================================


@pytest.fixture
def reference_snapshot():
    """Lobby floor fully instanced with the reference layout."""
    return make_snapshot({0: REFERENCE_FLOOR})


@pytest.fixture
def full_floor_snapshot():
    """Every slot cell of floor 0 present, no chunk codes."""
    return make_snapshot({0: [None] * 8})


@pytest.fixture
def empty_snapshot():
    """Nothing loaded at all."""
    return TileSnapshotBuilder().build()
