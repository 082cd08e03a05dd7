"""
Utility Module
==============

Configuration and list parsing.
"""

from .config import (
    ScoutConfig,
    split_config_list,
    parse_rotation_whitelist,
    is_room_whitelisted,
    is_room_blacklisted,
    is_layout_whitelisted,
)

__all__ = [
    'ScoutConfig',
    'split_config_list',
    'parse_rotation_whitelist',
    'is_room_whitelisted',
    'is_room_blacklisted',
    'is_layout_whitelisted',
]
