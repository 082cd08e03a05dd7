"""
Layout Catalog
==============

Static catalog of known raid layouts, loaded once from JSON.

File format:
    {
      "version": 1,
      "layouts": [
        {"name": "SCPFC.CSPCF", "code": "#-S-C?P?F-C?.-$-|...|..."},
        ...
      ]
    }

Catalog codes use the same alphabet as encoded raids; '?' may stand for any
character (e.g. 'C?' = any combat room, '??' = any room).

Catalog order is the tie-break when several entries match one code. Entries
that can match the same code are reported by find_ambiguities() and logged
when the catalog is loaded.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Tuple, Union

from raidscout.core.models import Layout
from raidscout.layout.encoder import split_code, tokens_compatible

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).parent / 'layouts.json'


class LayoutCatalog:
    """Ordered, immutable collection of layouts with pre-split patterns."""

    def __init__(self, layouts: Sequence[Layout]):
        self._layouts: Tuple[Layout, ...] = tuple(layouts)
        # Raises ValueError for malformed patterns
        self._tokens: Tuple[Tuple[str, ...], ...] = tuple(
            tuple(split_code(layout.code)) for layout in self._layouts
        )

        names = [layout.name for layout in self._layouts]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate layout names in catalog: {duplicates}")

    def __len__(self) -> int:
        return len(self._layouts)

    def __iter__(self) -> Iterator[Layout]:
        return iter(self._layouts)

    def entries(self) -> Iterator[Tuple[Layout, Tuple[str, ...]]]:
        """(layout, pattern tokens) pairs in catalog order."""
        return zip(self._layouts, self._tokens)

    def get(self, name: str) -> Optional[Layout]:
        for layout in self._layouts:
            if layout.name == name:
                return layout
        return None

    def find_ambiguities(self) -> List[Tuple[Layout, Layout]]:
        """
        Pairs of entries whose patterns are compatible with each other.

        Any such pair can match the same raid, leaving catalog order as the
        only tie-break. A well-formed catalog returns an empty list.
        """
        pairs = []
        for i in range(len(self._layouts)):
            for j in range(i + 1, len(self._layouts)):
                if all(tokens_compatible(a, b) for a, b in zip(self._tokens[i], self._tokens[j])):
                    pairs.append((self._layouts[i], self._layouts[j]))
        return pairs

    # ------------------------------------------
    # Loading
    # ------------------------------------------

    @classmethod
    def from_dict(cls, data: dict) -> 'LayoutCatalog':
        entries = data.get('layouts')
        if not isinstance(entries, list):
            raise ValueError("Layout catalog must contain a 'layouts' list")

        layouts = []
        for i, entry in enumerate(entries):
            try:
                layouts.append(Layout(name=str(entry['name']), code=str(entry['code'])))
            except (KeyError, TypeError) as e:
                raise ValueError(f"Layout entry {i} is missing 'name' or 'code': {entry!r}") from e
        return cls(layouts)

    @classmethod
    def load(cls, path: Union[str, Path] = DEFAULT_CATALOG_PATH) -> 'LayoutCatalog':
        """
        Load a catalog from JSON and check it for ambiguous entries.

        Args:
            path: Catalog file (defaults to the bundled layouts.json)
        """
        with open(path, 'r', encoding='utf-8') as f:
            catalog = cls.from_dict(json.load(f))

        for first, second in catalog.find_ambiguities():
            logger.warning(
                f"Ambiguous layout catalog {path}: '{first.name}' and '{second.name}' "
                f"can match the same raid; '{first.name}' wins by catalog order"
            )
        logger.debug(f"Loaded {len(catalog)} layouts from {path}")
        return catalog


@lru_cache(maxsize=None)
def default_catalog() -> LayoutCatalog:
    """The bundled catalog, loaded on first use and shared afterwards."""
    return LayoutCatalog.load(DEFAULT_CATALOG_PATH)
