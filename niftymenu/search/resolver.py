"""Free-text query resolution against the hierarchy index."""

from __future__ import annotations

from ..tree import MenuItem
from .fuzzy import Scorer, rank_candidates
from .index import PATH_SEPARATOR, HierarchyIndexer

ALTERNATE_SEPARATOR = ">"


def normalize_query(query: str) -> str:
    """Map the alternate hierarchy separator onto ``/``."""
    return query.replace(ALTERNATE_SEPARATOR, PATH_SEPARATOR)


def is_blank_query(query: str | None) -> bool:
    return not query or not query.strip()


class FuzzyResolver:
    """Pick the single best-matching menu item for a query.

    Resolution reads the index and the scorer only; overlay effects are the
    caller's business.
    """

    def __init__(self, indexer: HierarchyIndexer, scorer: Scorer = rank_candidates) -> None:
        self._indexer = indexer
        self._scorer = scorer

    def resolve(self, query: str | None) -> MenuItem | None:
        if is_blank_query(query):
            return None
        paths = self._indexer.paths()
        ranked = self._scorer(normalize_query(query), paths)
        if not ranked:
            return None
        return self._indexer.entries()[ranked[0].index].item
