"""Gesture routing onto the callout machine, resolver, and display toggles.

The router keeps no state of its own. Each gesture type maps to one
synchronous handler that runs to completion before the next gesture.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..callout import CalloutKind, CalloutStateMachine
from ..display import DisplaySettings
from ..search import FuzzyResolver, IndexNotReadyError
from ..tree import MenuItem
from .gestures import (
    SEARCH_MIN_QUERY_LENGTH,
    ControlGesture,
    ItemGesture,
    KeyGesture,
    SearchBlurGesture,
    SearchFocusGesture,
    SearchGesture,
)
from .key_registry import KeyComboBinding, KeyComboRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchOutcome:
    """What the host should do with the search field after a keystroke."""

    match: MenuItem | None = None
    committed: bool = False
    clear_query: bool = False
    blur_field: bool = False


class EventRouter:
    """Translate gestures into overlay transitions.

    Item clicks follow a fixed priority: the primary modifier toggles a
    checkmark, the secondary modifier toggles the arrow, and a plain click
    (or double-click) replaces the open path.
    """

    def __init__(
        self,
        *,
        callouts: CalloutStateMachine,
        resolver: FuzzyResolver,
        display: DisplaySettings | None = None,
        key_registry: KeyComboRegistry | None = None,
    ) -> None:
        self._callouts = callouts
        self._resolver = resolver
        self._display = display
        self._handlers: dict[type, Callable[..., object]] = {
            ItemGesture: self.handle_item,
            SearchGesture: self.handle_search,
            ControlGesture: self.handle_control,
            KeyGesture: self.handle_key,
            SearchFocusGesture: self.handle_search_focus,
            SearchBlurGesture: self.handle_search_blur,
        }
        self._controls: dict[str, Callable[[], object]] = {}
        if display is not None:
            self._controls = {
                "darkModeToggle": display.toggle_dark_mode,
                "exposeToggle": display.toggle_expose,
                "backgroundToggle": display.toggle_background_image,
                "arrowStyle": display.toggle_arrow_style,
            }
        self.keys = key_registry if key_registry is not None else KeyComboRegistry()
        self._register_default_keys()

    def _register_default_keys(self) -> None:
        self.keys.register_binding(KeyComboBinding(("shift+/",), self._focus_search_key))
        if self._display is not None:
            self.keys.register_bindings(
                KeyComboBinding(("shift+d",), self._toggle_dark_mode_key),
                KeyComboBinding(("shift+e",), self._toggle_expose_key),
            )

    def _focus_search_key(self) -> bool:
        self._callouts.focus_search()
        return True

    def _toggle_dark_mode_key(self) -> bool:
        assert self._display is not None
        self._display.toggle_dark_mode()
        return True

    def _toggle_expose_key(self) -> bool:
        assert self._display is not None
        self._display.toggle_expose()
        return True

    def dispatch(self, gesture: object) -> object:
        handler = self._handlers.get(type(gesture))
        if handler is None:
            raise TypeError(f"unsupported gesture: {gesture!r}")
        return handler(gesture)

    def handle_item(self, gesture: ItemGesture) -> bool:
        callouts = self._callouts
        item = gesture.target
        if item is not None and gesture.primary:
            callouts.toggle_checkmark(item)
            return True
        if item is not None and gesture.secondary:
            callouts.toggle(item, CalloutKind.ARROW)
            return True

        if item is None:
            callouts.clear_all(clear_persist=True)
            return True
        if callouts.state(item).clicked:
            callouts.clear_all(clear_persist=False)
            return True
        callouts.clear_all(clear_persist=False)
        callouts.mark_clicked(item, emphasized=gesture.double)
        return True

    def handle_search(self, gesture: SearchGesture) -> SearchOutcome:
        callouts = self._callouts
        if gesture.is_cancel:
            callouts.clear_all(clear_persist=True)
            return SearchOutcome(clear_query=True, blur_field=True)

        if len(gesture.query) < SEARCH_MIN_QUERY_LENGTH:
            callouts.clear_all(clear_persist=False)
            return SearchOutcome()

        match = self._resolve(gesture.query)
        callouts.clear_all(clear_persist=False)
        if match is None:
            return SearchOutcome()
        if gesture.is_commit:
            callouts.mark_clicked(match)
            callouts.drop_persist(keep_designated=True)
            return SearchOutcome(match=match, committed=True, blur_field=True)
        callouts.highlight(match)
        return SearchOutcome(match=match)

    def handle_control(self, gesture: ControlGesture) -> bool:
        action = self._controls.get(gesture.control_id)
        if action is None:
            logger.info("unrecognized control id %r", gesture.control_id)
            return False
        action()
        return True

    def handle_key(self, gesture: KeyGesture) -> bool:
        return bool(self.keys.dispatch(gesture.combo))

    def handle_search_focus(self, gesture: SearchFocusGesture) -> MenuItem | None:
        return self._callouts.focus_search()

    def handle_search_blur(self, gesture: SearchBlurGesture) -> bool:
        self._callouts.drop_persist(keep_designated=False)
        return True

    def _resolve(self, query: str) -> MenuItem | None:
        try:
            return self._resolver.resolve(query)
        except IndexNotReadyError:
            logger.warning("search for %r before a menu tree was attached", query)
            return None
