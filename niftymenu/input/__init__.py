"""Input-layer public API: gesture records, key-combo registry, and router."""

from .gestures import (
    SEARCH_CANCEL_KEYS,
    SEARCH_COMMIT_KEYS,
    SEARCH_MIN_QUERY_LENGTH,
    ControlGesture,
    Gesture,
    ItemGesture,
    KeyGesture,
    SearchBlurGesture,
    SearchFocusGesture,
    SearchGesture,
)
from .key_registry import KeyComboBinding, KeyComboRegistry, normalize_combo
from .router import EventRouter, SearchOutcome

__all__ = [
    "SEARCH_CANCEL_KEYS",
    "SEARCH_COMMIT_KEYS",
    "SEARCH_MIN_QUERY_LENGTH",
    "ControlGesture",
    "EventRouter",
    "Gesture",
    "ItemGesture",
    "KeyComboBinding",
    "KeyComboRegistry",
    "KeyGesture",
    "SearchBlurGesture",
    "SearchFocusGesture",
    "SearchGesture",
    "SearchOutcome",
    "normalize_combo",
]
