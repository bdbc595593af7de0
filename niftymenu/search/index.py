"""Hierarchy index over menu titles.

Each menu item is addressed by its ancestor titles joined with ``/``. The
ordered list of ``(path, item)`` pairs is built once per tree and reused by
every search until the tree owner invalidates it.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from ..tree import MenuItem, iter_ancestors, iter_preorder

logger = logging.getLogger(__name__)

PATH_SEPARATOR = "/"


class IndexNotReadyError(RuntimeError):
    """Raised when the index is requested before a menu tree is attached."""


class MenuForest(Protocol):
    def roots(self) -> Sequence[MenuItem]: ...


@dataclass(frozen=True)
class PathEntry:
    """One searchable row: the item's hierarchy path and the item itself."""

    path: str
    item: MenuItem


def item_path(item: MenuItem) -> str:
    """Join non-empty strict-ancestor titles (root first) and the item's own title."""
    parts = [item.title()]
    for ancestor in iter_ancestors(item):
        title = ancestor.title()
        if title:
            parts.insert(0, title)
    return PATH_SEPARATOR.join(parts)


def build_path_entries(roots: Sequence[MenuItem]) -> list[PathEntry]:
    """Return path entries for every item in pre-order."""
    return [PathEntry(item_path(item), item) for item in iter_preorder(roots)]


class HierarchyIndexer:
    """Owns the cached path index for one menu tree.

    The cache is never refreshed implicitly: callers that change the tree
    must call ``invalidate`` (or ``attach`` a new tree).
    """

    def __init__(self, tree: MenuForest | None = None) -> None:
        self._tree = tree
        self._entries: list[PathEntry] | None = None
        self._paths: list[str] | None = None

    @property
    def ready(self) -> bool:
        return self._tree is not None

    @property
    def cached(self) -> bool:
        return self._entries is not None

    def attach(self, tree: MenuForest) -> None:
        """Switch to ``tree`` and drop any index built for the previous one."""
        self._tree = tree
        self.invalidate()

    def invalidate(self) -> None:
        if self._entries is not None:
            logger.debug("menu index invalidated (%d entries dropped)", len(self._entries))
        self._entries = None
        self._paths = None

    def rebuild(self) -> list[PathEntry]:
        self.invalidate()
        return self.entries()

    def entries(self) -> list[PathEntry]:
        """Return the cached entry list, building it on first use."""
        if self._entries is None:
            if self._tree is None:
                raise IndexNotReadyError("menu index requested before a tree was attached")
            self._entries = build_path_entries(self._tree.roots())
            self._paths = [entry.path for entry in self._entries]
            logger.debug("menu index built with %d entries", len(self._entries))
        return self._entries

    def paths(self) -> list[str]:
        """Return the cached path strings, index-aligned with ``entries()``."""
        self.entries()
        assert self._paths is not None
        return self._paths

    def item_for_path(self, path: str) -> MenuItem | None:
        """Return the first item (pre-order) whose path equals ``path``."""
        for entry in self.entries():
            if entry.path == path:
                return entry.item
        return None
