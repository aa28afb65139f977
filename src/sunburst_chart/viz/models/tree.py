"""Tree data models for the sunburst chart."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator

DEFAULT_ROOT_LABEL = "Investments"


@dataclass
class CategoryNode:
    """A node in the aggregated category tree.

    Internal nodes carry the sum of every item beneath them in
    ``total_value``. Leaves additionally carry the item's own ``value``.
    """

    name: str
    total_value: float = 0
    value: float | None = None

    # Keyed by name, in first-insertion order; scoped to this node only
    _children: dict[str, "CategoryNode"] = field(
        default_factory=dict, repr=False, compare=False
    )

    parent: "CategoryNode | None" = field(default=None, repr=False, compare=False)

    @property
    def children(self) -> list["CategoryNode"]:
        return list(self._children.values())

    @property
    def is_leaf(self) -> bool:
        """Check if this is a leaf node (no children)."""
        return not self._children

    @property
    def depth(self) -> int:
        """Calculate depth from root."""
        if self.parent is None:
            return 0
        return self.parent.depth + 1

    @property
    def path(self) -> tuple[str, ...]:
        """Category names from the first level down to this node (root excluded)."""
        if self.parent is None:
            return ()
        return (*self.parent.path, self.name)

    @property
    def display_value(self) -> float:
        """Aggregate for internal nodes, own value for leaves."""
        if self._children or self.value is None:
            return self.total_value
        return self.value

    def child(self, name: str) -> "CategoryNode | None":
        """Look up a direct child by name."""
        return self._children.get(name)

    def add_child(self, child: "CategoryNode") -> "CategoryNode":
        """Add a child node and set parent reference."""
        if child.name in self._children:
            raise ValueError(f"Node '{self.name}' already has a child named '{child.name}'")
        child.parent = self
        self._children[child.name] = child
        return child

    def get_or_create_child(self, name: str) -> tuple["CategoryNode", bool]:
        """Return the child called name, creating it if missing.

        Returns:
            (child, created)
        """
        existing = self._children.get(name)
        if existing is not None:
            return existing, False
        return self.add_child(CategoryNode(name=name)), True

    def iter_nodes(self) -> Iterator["CategoryNode"]:
        """Iterate over this node and its descendants (depth-first, pre-order)."""
        yield self
        for child in self._children.values():
            yield from child.iter_nodes()

    def leaves(self) -> list["CategoryNode"]:
        return [n for n in self.iter_nodes() if n.is_leaf]

    def to_dict(self, include_children: bool = True) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "name": self.name,
            "totalValue": self.total_value,
        }
        if self.value is not None:
            result["value"] = self.value
        if include_children:
            result["children"] = [
                child.to_dict(include_children=True) for child in self._children.values()
            ]
        return result


@dataclass
class SunburstTree:
    """The aggregated tree for one dataset plus its chart metadata."""

    root: CategoryNode
    title: str = "Sunburst"

    # Percentage denominator, fixed for the dataset's lifetime
    total_sum: float = 0

    level_count: int = 0

    def iter_nodes(self) -> list[CategoryNode]:
        """All nodes in the tree (depth-first)."""
        return list(self.root.iter_nodes())

    def descendants(self) -> list[CategoryNode]:
        """All nodes except the root, i.e. the ones a chart draws."""
        return self.iter_nodes()[1:]

    def leaves(self) -> list[CategoryNode]:
        if self.root.is_leaf:
            return []
        return self.root.leaves()

    def find(self, *path: str) -> CategoryNode | None:
        """Follow a category path from the root."""
        node: CategoryNode | None = self.root
        for name in path:
            if node is None:
                return None
            node = node.child(name)
        return node

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "title": self.title,
            "totalSum": self.total_sum,
            "levelCount": self.level_count,
            "root": self.root.to_dict(),
        }

    def get_summary(self) -> dict[str, Any]:
        """Get summary counts for the entire tree."""
        nodes = self.iter_nodes()
        return {
            "title": self.title,
            "total_sum": self.total_sum,
            "level_count": self.level_count,
            "node_count": len(nodes),
            "leaf_count": len(self.leaves()),
            "top_level_count": len(self.root.children),
        }
