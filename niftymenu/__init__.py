"""Public package surface for niftymenu.

Exports the application composition object plus the tree types most callers
need. Index, callout, and input internals live in submodules.
"""

from __future__ import annotations

from .runtime.application import MenuApplication
from .tree import MenuItem, MenuNode, MenuTree

__all__ = ["MenuApplication", "MenuItem", "MenuNode", "MenuTree"]
