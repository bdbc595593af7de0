"""Application object composing index, resolver, callouts, and preferences."""

from __future__ import annotations

from ..callout import CalloutStateMachine
from ..display import DisplaySettings
from ..input import EventRouter, ItemGesture
from ..search import FuzzyResolver, HierarchyIndexer, Scorer, is_blank_query, rank_candidates
from ..tree import MenuItem, MenuTree
from .config import Preferences


class MenuApplication:
    """Composed cheatsheet overlay core plus its programmatic API.

    ``click``/``double_click`` drive the menu by query the same way a user
    gesture would, so scripted and interactive use share one code path.
    """

    def __init__(
        self,
        tree: MenuTree | None = None,
        *,
        preferences: Preferences | None = None,
        search_item: MenuItem | None = None,
        scorer: Scorer = rank_candidates,
    ) -> None:
        self.tree = tree
        self.preferences = preferences if preferences is not None else Preferences()
        self.indexer = HierarchyIndexer(tree)
        self.resolver = FuzzyResolver(self.indexer, scorer)
        self.callouts = CalloutStateMachine(search_item=search_item)
        self.display = DisplaySettings(self.preferences, callouts=self.callouts)
        self.router = EventRouter(
            callouts=self.callouts,
            resolver=self.resolver,
            display=self.display,
        )

    def start(self) -> None:
        """Warm the index (when a tree is attached) and restore display preferences."""
        if self.indexer.ready:
            self.indexer.entries()
        self.display.restore()

    def attach_tree(self, tree: MenuTree, search_item: MenuItem | None = None) -> None:
        self.tree = tree
        self.indexer.attach(tree)
        self.callouts.reset(search_item)

    def tree_changed(self) -> None:
        """Tell the index that titles or shape changed; it rebuilds on next search."""
        self.indexer.invalidate()

    def fuzzy_find(self, query: str) -> MenuItem | None:
        return self.resolver.resolve(query)

    def click(self, query: str, force: bool = False) -> MenuItem | None:
        """Open the best match for ``query``; ``force`` keeps an open match open."""
        return self._activate_by_query(query, force=force, double=False)

    def double_click(self, query: str, force: bool = False) -> MenuItem | None:
        """Open and emphasize the best match for ``query``."""
        return self._activate_by_query(query, force=force, double=True)

    def _activate_by_query(self, query: str, *, force: bool, double: bool) -> MenuItem | None:
        if force or is_blank_query(query):
            self.callouts.clear_all(clear_persist=True)
        if is_blank_query(query):
            return None
        match = self.resolver.resolve(query)
        if match is not None:
            self.router.dispatch(ItemGesture(match, double=double))
        return match
