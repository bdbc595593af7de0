"""Discrete input gestures delivered by the host UI.

The host resolves pointer targets to menu items and decodes modifier keys;
the router only ever sees these small immutable records.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..tree import MenuItem

SEARCH_CANCEL_KEYS = frozenset({"Escape"})
SEARCH_COMMIT_KEYS = frozenset({"Enter", "Return"})
SEARCH_MIN_QUERY_LENGTH = 2


@dataclass(frozen=True)
class ItemGesture:
    """Click or double-click. ``target`` is ``None`` for the background.

    ``primary`` is the checkmark modifier (meta/command), ``secondary`` the
    arrow modifier (alt/option).
    """

    target: MenuItem | None
    double: bool = False
    primary: bool = False
    secondary: bool = False


@dataclass(frozen=True)
class SearchGesture:
    """Key pressed in the search field; ``query`` is the field text after it."""

    query: str
    key: str = ""

    @property
    def is_cancel(self) -> bool:
        return self.key in SEARCH_CANCEL_KEYS

    @property
    def is_commit(self) -> bool:
        return self.key in SEARCH_COMMIT_KEYS


@dataclass(frozen=True)
class ControlGesture:
    """Click on a display toggle button, identified by its control id."""

    control_id: str


@dataclass(frozen=True)
class KeyGesture:
    """Global keyboard shortcut outside the search field, e.g. ``shift+d``."""

    combo: str


@dataclass(frozen=True)
class SearchFocusGesture:
    """Request to reveal and focus the search affordance."""


@dataclass(frozen=True)
class SearchBlurGesture:
    """The search field lost focus."""


Gesture = ItemGesture | SearchGesture | ControlGesture | KeyGesture | SearchFocusGesture | SearchBlurGesture
