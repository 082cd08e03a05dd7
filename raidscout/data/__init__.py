"""
Scene Data Module
=================

Tile snapshots and the first two pipeline stages.

Classes:
    TileSnapshot: Read-only scene grid (numpy backed)
    TileSnapshotBuilder: Mutable helper for assembling snapshots
    GridScanner: Anchor search and slot enumeration
    BoundaryPolicy: Boundary rules of the grid scanner
    RoomClassifier: Base tile -> classified Room
"""

from .snapshot import TileSnapshot, TileSnapshotBuilder
from .grid_scanner import GridScanner, BoundaryPolicy
from .room_classifier import RoomClassifier

__all__ = [
    'TileSnapshot',
    'TileSnapshotBuilder',
    'GridScanner',
    'BoundaryPolicy',
    'RoomClassifier',
]
