"""Menu search: hierarchy index, label scorer, and query resolver."""

from __future__ import annotations

from .fuzzy import RankedCandidate, Scorer, fuzzy_score, rank_candidates
from .index import HierarchyIndexer, IndexNotReadyError, PathEntry, build_path_entries, item_path
from .resolver import FuzzyResolver, is_blank_query, normalize_query

__all__ = [
    "FuzzyResolver",
    "HierarchyIndexer",
    "IndexNotReadyError",
    "PathEntry",
    "RankedCandidate",
    "Scorer",
    "build_path_entries",
    "fuzzy_score",
    "is_blank_query",
    "item_path",
    "normalize_query",
    "rank_candidates",
]
