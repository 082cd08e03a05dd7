"""
Raidscout Core Module
=====================

Definitions, template table and result data classes shared by every stage.

Components:
- definitions: Geometry constants, room/boss/puzzle enums, code alphabet
- templates: Chunk template codes and the template -> room table
- models: Tile, Room, Layout, Raid

Usage:
    from raidscout.core import RoomType, Boss, Room, Raid
"""

from raidscout.core.definitions import (
    RoomType,
    Boss,
    Puzzle,
    SCENE_SIZE,
    ROOM_MAX_SIZE,
    LOBBY_PLANE,
    ANCHOR_OBJECT_ID,
    FLOOR_COUNT,
    SLOTS_PER_FLOOR,
    TOTAL_SLOTS,
    UNKNOWN_TOKEN,
    WILDCARD,
    DEFAULT_ROTATION_CONSTRAINTS,
)
from raidscout.core.templates import (
    InstanceTemplate,
    RoomSpec,
    TEMPLATE_ROOMS,
    decode_chunk,
    encode_chunk,
    template_chunk,
)
from raidscout.core.models import Tile, Room, Layout, Raid

__all__ = [
    # Definitions
    'RoomType',
    'Boss',
    'Puzzle',
    'SCENE_SIZE',
    'ROOM_MAX_SIZE',
    'LOBBY_PLANE',
    'ANCHOR_OBJECT_ID',
    'FLOOR_COUNT',
    'SLOTS_PER_FLOOR',
    'TOTAL_SLOTS',
    'UNKNOWN_TOKEN',
    'WILDCARD',
    'DEFAULT_ROTATION_CONSTRAINTS',
    # Templates
    'InstanceTemplate',
    'RoomSpec',
    'TEMPLATE_ROOMS',
    'decode_chunk',
    'encode_chunk',
    'template_chunk',
    # Models
    'Tile',
    'Room',
    'Layout',
    'Raid',
]
