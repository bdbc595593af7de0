"""Overlay callout state for menu items.

Owns every per-item overlay flag and enforces the exclusivity rules in one
place: one arrow, one shortcut callout, one transient search highlight, and
a clicked set that is always a single item plus its ancestors. Every
transition clears conflicting state before setting new state, so any input
source (pointer, keyboard, programmatic) can drive it in any order.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from .tree import MenuItem, iter_ancestors

ARROW_STYLES = ("arrow", "circle")


class CalloutKind(str, Enum):
    ARROW = "arrow"
    SHORTCUT = "shortcut"


class ArrowDirection(str, Enum):
    LEFT = "left"
    RIGHT = "right"


@dataclass
class OverlayState:
    """Overlay flags for one menu item."""

    has_arrow: bool = False
    arrow_direction: ArrowDirection = ArrowDirection.RIGHT
    has_shortcut_callout: bool = False
    checked: bool = False
    clicked: bool = False
    is_ancestor_of_clicked: bool = False
    persist: bool = False
    emphasized: bool = False
    highlighted: bool = False


def normalize_arrow_style(style: object) -> str:
    return style if isinstance(style, str) and style in ARROW_STYLES else "arrow"


class CalloutStateMachine:
    """Global overlay configuration across one menu tree.

    State is stored lazily per item; items never touched read as a blank
    ``OverlayState``. ``dirty`` is raised whenever a transition changes
    anything and is left for the renderer to reset.
    """

    def __init__(self, search_item: MenuItem | None = None, arrow_style: str = "arrow") -> None:
        self.arrow_style = normalize_arrow_style(arrow_style)
        self.reset(search_item)

    def reset(self, search_item: MenuItem | None = None) -> None:
        """Forget every item's state, e.g. after switching to another tree."""
        self._states: dict[MenuItem, OverlayState] = {}
        self._arrow_item: MenuItem | None = None
        self._shortcut_item: MenuItem | None = None
        self._highlighted_item: MenuItem | None = None
        self._active_item: MenuItem | None = None
        self.search_item = search_item
        self.dirty = True

    # -- read access -----------------------------------------------------

    def state(self, item: MenuItem) -> OverlayState:
        """Return the live overlay state for ``item``, creating it when absent."""
        existing = self._states.get(item)
        if existing is None:
            existing = OverlayState()
            self._states[item] = existing
        return existing

    @property
    def arrow_item(self) -> MenuItem | None:
        return self._arrow_item

    @property
    def shortcut_item(self) -> MenuItem | None:
        return self._shortcut_item

    @property
    def highlighted_item(self) -> MenuItem | None:
        return self._highlighted_item

    @property
    def active_item(self) -> MenuItem | None:
        """Item whose path is currently marked clicked, if any."""
        return self._active_item

    def active_item_of(self, kind: CalloutKind) -> MenuItem | None:
        kind = CalloutKind(kind)
        return self._arrow_item if kind is CalloutKind.ARROW else self._shortcut_item

    def holds(self, item: MenuItem, kind: CalloutKind) -> bool:
        return self.active_item_of(kind) is item

    def clicked_items(self) -> list[MenuItem]:
        return [item for item, state in self._states.items() if state.clicked]

    def checked_items(self) -> list[MenuItem]:
        return [item for item, state in self._states.items() if state.checked]

    def persisted_items(self) -> list[MenuItem]:
        return [item for item, state in self._states.items() if state.persist]

    def _touched(self) -> Iterator[OverlayState]:
        return iter(self._states.values())

    # -- callouts ----------------------------------------------------------

    def activate(self, item: MenuItem, kind: CalloutKind) -> None:
        """Give ``item`` the ``kind`` callout and open its path.

        The shortcut callout is tracked whether or not the item carries a
        shortcut hint; a renderer draws nothing for an item without one.
        """
        kind = CalloutKind(kind)
        self.deactivate(CalloutKind.ARROW)
        self.deactivate(CalloutKind.SHORTCUT)
        self._set_clicked_path(item)
        state = self.state(item)
        if kind is CalloutKind.ARROW:
            state.has_arrow = True
            state.arrow_direction = ArrowDirection.LEFT if item.children() else ArrowDirection.RIGHT
            self._arrow_item = item
        else:
            state.has_shortcut_callout = True
            self._shortcut_item = item
        self.dirty = True

    def deactivate(self, kind: CalloutKind) -> None:
        """Remove the ``kind`` callout from whichever item holds it."""
        kind = CalloutKind(kind)
        if kind is CalloutKind.ARROW:
            if self._arrow_item is None:
                return
            state = self.state(self._arrow_item)
            state.has_arrow = False
            state.arrow_direction = ArrowDirection.RIGHT
            self._arrow_item = None
        else:
            if self._shortcut_item is None:
                return
            self.state(self._shortcut_item).has_shortcut_callout = False
            self._shortcut_item = None
        self.dirty = True

    def toggle(self, item: MenuItem, kind: CalloutKind) -> None:
        kind = CalloutKind(kind)
        if self.holds(item, kind):
            self.deactivate(kind)
            return
        other = CalloutKind.SHORTCUT if kind is CalloutKind.ARROW else CalloutKind.ARROW
        self.deactivate(other)
        self.activate(item, kind)

    def toggle_checkmark(self, item: MenuItem) -> bool:
        """Flip ``checked`` on ``item`` alone and return the new value."""
        state = self.state(item)
        state.checked = not state.checked
        self.dirty = True
        return state.checked

    # -- clicked path and transient flags -----------------------------------

    def mark_clicked(self, item: MenuItem, emphasized: bool = False) -> None:
        """Open ``item``'s path, replacing any previously clicked path and callouts."""
        self.deactivate(CalloutKind.ARROW)
        self.deactivate(CalloutKind.SHORTCUT)
        self._clear_transient()
        self._set_clicked_path(item)
        if emphasized:
            self.state(item).emphasized = True
        self.dirty = True

    def highlight(self, item: MenuItem | None) -> None:
        """Move the transient search highlight to ``item`` (``None`` clears it)."""
        if self._highlighted_item is item:
            return
        if self._highlighted_item is not None:
            self.state(self._highlighted_item).highlighted = False
        self._highlighted_item = item
        if item is not None:
            self.state(item).highlighted = True
        self.dirty = True

    def clear_all(self, clear_persist: bool) -> None:
        """Canonical reset: callouts, clicked path, and transient flags.

        ``persist`` on the designated search item survives unless
        ``clear_persist`` is true. Checkmarks are never touched.
        """
        self.deactivate(CalloutKind.ARROW)
        self.deactivate(CalloutKind.SHORTCUT)
        self._clear_clicked()
        self._clear_transient()
        if clear_persist:
            self.drop_persist(keep_designated=False)
        self.dirty = True

    # -- search affordance --------------------------------------------------

    def designate_search_item(self, item: MenuItem | None) -> None:
        if self.search_item is not None and self.search_item is not item:
            self.state(self.search_item).persist = False
        self.search_item = item
        self.dirty = True

    def focus_search(self) -> MenuItem | None:
        """Open and pin the designated search item; returns it."""
        self.clear_all(clear_persist=False)
        item = self.search_item
        if item is None:
            return None
        self._set_clicked_path(item)
        self.state(item).persist = True
        return item

    def drop_persist(self, keep_designated: bool) -> None:
        for item, state in self._states.items():
            if keep_designated and item is self.search_item:
                continue
            if state.persist:
                state.persist = False
                self.dirty = True

    # -- arrow style --------------------------------------------------------

    def set_arrow_style(self, style: object) -> str:
        normalized = normalize_arrow_style(style)
        if normalized != self.arrow_style:
            self.arrow_style = normalized
            if self._arrow_item is not None:
                self.dirty = True
        return normalized

    # -- internals -----------------------------------------------------------

    def _set_clicked_path(self, item: MenuItem) -> None:
        self._clear_clicked()
        self.state(item).clicked = True
        for ancestor in iter_ancestors(item):
            ancestor_state = self.state(ancestor)
            ancestor_state.clicked = True
            ancestor_state.is_ancestor_of_clicked = True
        self._active_item = item

    def _clear_clicked(self) -> None:
        for state in self._touched():
            state.clicked = False
            state.is_ancestor_of_clicked = False
        self._active_item = None

    def _clear_transient(self) -> None:
        for state in self._touched():
            state.emphasized = False
        self.highlight(None)
