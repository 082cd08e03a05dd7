"""
Layout Matcher
==============

Stage 4 of the pipeline: find the catalog layout compatible with a raid code.

Wildcard rule: a '?' in either the raid code or the catalog pattern matches
any character at the same position, so an unobserved slot ('??') never rules
a layout out.
"""

import logging
from typing import List, Optional

from raidscout.core.models import Layout
from raidscout.layout.catalog import LayoutCatalog, default_catalog
from raidscout.layout.encoder import split_code, tokens_compatible

logger = logging.getLogger(__name__)


def codes_compatible(code: str, pattern: str) -> bool:
    """True if a raid code and a layout pattern agree under the wildcard rule."""
    return all(tokens_compatible(a, b) for a, b in zip(split_code(code), split_code(pattern)))


class LayoutMatcher:
    """Looks up raid codes in a LayoutCatalog."""

    def __init__(self, catalog: Optional[LayoutCatalog] = None):
        self.catalog = catalog if catalog is not None else default_catalog()

    def find_all(self, code: str) -> List[Layout]:
        """Every compatible layout, in catalog order."""
        tokens = split_code(code)
        return [
            layout for layout, pattern in self.catalog.entries()
            if all(tokens_compatible(a, b) for a, b in zip(tokens, pattern))
        ]

    def find_layout(self, code: str) -> Optional[Layout]:
        """
        First compatible layout in catalog order.

        Args:
            code: Raid code from encode_layout

        Returns:
            The matching Layout, or None when nothing is compatible
        """
        tokens = split_code(code)
        for layout, pattern in self.catalog.entries():
            if all(tokens_compatible(a, b) for a, b in zip(tokens, pattern)):
                return layout

        logger.debug(f"No layout matches code {code}")
        return None
