"""Menu tree collaborator types.

``MenuItem`` is the read-only capability surface the index and callout code
consume. ``MenuNode``/``MenuTree`` are a concrete in-memory tree used by the
application and tests; any other tree can be plugged in as long as it
exposes the same accessors.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@runtime_checkable
class MenuItem(Protocol):
    """Node handle owned by an external tree."""

    def title(self) -> str: ...

    def children(self) -> Sequence[MenuItem]: ...

    def parent(self) -> MenuItem | None: ...


def first_line_title(label: str) -> str:
    """Return the first line of ``label``, trimmed."""
    return label.split("\n", 1)[0].strip()


def iter_ancestors(item: MenuItem) -> Iterator[MenuItem]:
    """Yield strict ancestors from nearest parent up to the root."""
    node = item.parent()
    while node is not None:
        yield node
        node = node.parent()


def iter_preorder(roots: Sequence[MenuItem]) -> Iterator[MenuItem]:
    """Depth-first pre-order walk over ``roots`` and their descendants."""
    stack = list(reversed(roots))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children()))


@dataclass(eq=False)
class MenuNode:
    """One menu entry: a label, an optional shortcut hint, and child entries.

    Equality is identity so nodes can key overlay-state maps even when two
    entries share a label.
    """

    label: str
    shortcut: str | None = None
    items: list[MenuNode] = field(default_factory=list)
    _parent: MenuNode | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        for child in self.items:
            child._parent = self

    def title(self) -> str:
        return first_line_title(self.label)

    def children(self) -> list[MenuNode]:
        return self.items

    def parent(self) -> MenuNode | None:
        return self._parent

    def add(self, child: MenuNode) -> MenuNode:
        """Append ``child`` and return it."""
        child._parent = self
        self.items.append(child)
        return child


@dataclass(eq=False)
class MenuTree:
    """Ordered forest of top-level menu nodes."""

    nodes: list[MenuNode] = field(default_factory=list)

    def roots(self) -> list[MenuNode]:
        return self.nodes

    def walk(self) -> Iterator[MenuNode]:
        return iter_preorder(self.nodes)

    def find(self, *titles: str) -> MenuNode | None:
        """Follow exact titles from a root down; ``None`` when any step misses."""
        candidates: Sequence[MenuNode] = self.nodes
        found: MenuNode | None = None
        for wanted in titles:
            found = next((node for node in candidates if node.title() == wanted), None)
            if found is None:
                return None
            candidates = found.children()
        return found

    @classmethod
    def from_outline(cls, outline: Sequence[object]) -> MenuTree:
        """Build a tree from nested ``(label, children)`` tuples or plain labels.

        A tuple may also carry a shortcut as ``(label, shortcut, children)``.
        """
        return cls([_node_from_outline(entry) for entry in outline])


def _node_from_outline(entry: object) -> MenuNode:
    if isinstance(entry, str):
        return MenuNode(entry)
    if isinstance(entry, MenuNode):
        return entry
    if isinstance(entry, tuple):
        if len(entry) == 2:
            label, children = entry
            shortcut = None
        elif len(entry) == 3:
            label, shortcut, children = entry
        else:
            raise ValueError(f"outline tuple must have 2 or 3 fields: {entry!r}")
        return MenuNode(
            str(label),
            shortcut=shortcut,
            items=[_node_from_outline(child) for child in children],
        )
    raise ValueError(f"unsupported outline entry: {entry!r}")
