"""Display toggles backed by persisted preferences.

Dark mode, expose mode, the background image, and the callout arrow style
are remembered across sessions. Every toggle writes through the preference
store immediately.
"""

from __future__ import annotations

from dataclasses import dataclass

from .callout import CalloutStateMachine, normalize_arrow_style
from .runtime.config import Preferences


@dataclass
class DisplaySettings:
    preferences: Preferences
    callouts: CalloutStateMachine | None = None
    dark_mode: bool = False
    expose_mode: bool = False
    background_image: bool = False
    arrow_style: str = "arrow"

    def restore(self) -> None:
        """Apply stored preferences without writing them back."""
        self.dark_mode = self.preferences.get_bool("darkMode")
        self.expose_mode = self.preferences.get_bool("exposeMode")
        self.background_image = self.preferences.get_bool("backgroundImage")
        self._apply_arrow_style(self.preferences.get("arrowStyle"))

    def set_dark_mode(self, enabled: bool) -> None:
        self.dark_mode = bool(enabled)
        self.preferences.set("darkMode", int(self.dark_mode))

    def toggle_dark_mode(self) -> bool:
        self.set_dark_mode(not self.dark_mode)
        return self.dark_mode

    def set_expose_mode(self, enabled: bool) -> None:
        self.expose_mode = bool(enabled)
        self.preferences.set("exposeMode", int(self.expose_mode))

    def toggle_expose(self) -> bool:
        self.set_expose_mode(not self.expose_mode)
        return self.expose_mode

    def set_background_image(self, enabled: bool) -> None:
        self.background_image = bool(enabled)
        self.preferences.set("backgroundImage", int(self.background_image))

    def toggle_background_image(self) -> bool:
        self.set_background_image(not self.background_image)
        return self.background_image

    def set_arrow_style(self, style: object) -> str:
        """Normalize to ``"arrow"``/``"circle"``, apply, and persist."""
        normalized = self._apply_arrow_style(style)
        self.preferences.set("arrowStyle", normalized)
        return normalized

    def toggle_arrow_style(self) -> str:
        current = self.preferences.get("arrowStyle")
        return self.set_arrow_style("arrow" if current == "circle" else "circle")

    @property
    def arrow_style_label(self) -> str:
        return f"Arrow style: {self.arrow_style.capitalize()}"

    def _apply_arrow_style(self, style: object) -> str:
        normalized = normalize_arrow_style(style)
        self.arrow_style = normalized
        if self.callouts is not None:
            self.callouts.set_arrow_style(normalized)
        return normalized
