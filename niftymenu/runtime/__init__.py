"""Runtime composition: preference persistence and the application object."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .application import MenuApplication


def __getattr__(name: str):
    if name == "MenuApplication":
        from .application import MenuApplication as _MenuApplication

        return _MenuApplication
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["MenuApplication"]
