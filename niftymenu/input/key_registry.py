"""Key-combo registry for global menu shortcuts."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

_MODIFIER_ORDER = ("ctrl", "alt", "meta", "shift")


def normalize_combo(combo: str) -> str:
    """Lower-case a ``mod+key`` token and order its modifiers canonically.

    ``Shift+D`` and ``shift+d`` address the same binding; the trailing key
    keeps ``+`` itself bindable (``shift++``).
    """
    text = combo.strip().lower()
    if text in ("", "+"):
        return text
    if text.endswith("++"):
        head, key = text[:-2], "+"
    else:
        head, _sep, key = text.rpartition("+")
    modifiers = {part for part in head.split("+") if part}
    ordered = [name for name in _MODIFIER_ORDER if name in modifiers]
    ordered.extend(sorted(modifiers.difference(_MODIFIER_ORDER)))
    return "+".join([*ordered, key])


@dataclass(frozen=True)
class KeyComboBinding:
    """Mapping from one or more key tokens to a single action callback."""

    combos: tuple[str, ...]
    handler: Callable[[], bool | None]


class KeyComboRegistry:
    """Small key-dispatch table with optional key normalization strategy."""

    def __init__(self, normalize: Callable[[str], str] | None = normalize_combo) -> None:
        self._normalize = normalize if normalize is not None else self._identity
        self._handlers: dict[str, Callable[[], bool | None]] = {}

    @staticmethod
    def _identity(key: str) -> str:
        return key

    def register_binding(self, binding: KeyComboBinding) -> KeyComboRegistry:
        """Register one binding, overwriting existing handlers for same combos."""
        for combo in binding.combos:
            self._handlers[self._normalize(combo)] = binding.handler
        return self

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        for binding in bindings:
            self.register_binding(binding)
        return self

    def bound(self, key: str) -> bool:
        return self._normalize(key) in self._handlers

    def dispatch(self, key: str) -> bool | None:
        """Invoke bound handler for ``key``; ``None`` when nothing is bound."""
        handler = self._handlers.get(self._normalize(key))
        if handler is None:
            return None
        return handler()
