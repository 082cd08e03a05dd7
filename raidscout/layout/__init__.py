"""
Layout Module
=============

Canonical layout codes and catalog lookup.

Usage:
    from raidscout.layout import encode_layout, LayoutMatcher

    code = encode_layout(rooms)
    layout = LayoutMatcher().find_layout(code)
"""

from .encoder import encode_layout, encode_room, split_code, tokens_compatible
from .catalog import LayoutCatalog, default_catalog, DEFAULT_CATALOG_PATH
from .matcher import LayoutMatcher, codes_compatible

__all__ = [
    'encode_layout',
    'encode_room',
    'split_code',
    'tokens_compatible',
    'LayoutCatalog',
    'default_catalog',
    'DEFAULT_CATALOG_PATH',
    'LayoutMatcher',
    'codes_compatible',
]
