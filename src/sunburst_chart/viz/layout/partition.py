"""Radial partition layout for sunburst charts.

Each node gets an angular span [x0, x1] within its parent's span,
proportional to the sum of leaf values beneath it, and a ring [y0, y1]
determined by its depth. Angles are radians over [0, 2*pi]; rings are
fractions of the outer radius over [0, 1].
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from sunburst_chart.viz.models.tree import CategoryNode, SunburstTree

logger = logging.getLogger(__name__)

FULL_CIRCLE = 2 * math.pi


@dataclass
class ArcLayout:
    """Layout information for a node."""

    x0: float
    x1: float
    y0: float
    y1: float
    node: CategoryNode

    @property
    def depth(self) -> int:
        return self.node.depth

    @property
    def mid_angle(self) -> float:
        return (self.x0 + self.x1) / 2

    @property
    def mid_radius(self) -> float:
        return (self.y0 + self.y1) / 2

    @property
    def span(self) -> float:
        return self.x1 - self.x0


def node_weight(node: CategoryNode) -> float:
    """Angular weight: leaf value, or the sum of the children's weights."""
    if node.is_leaf:
        return node.value if node.value is not None else node.total_value
    return sum(node_weight(child) for child in node.children)


def partition(tree: SunburstTree | CategoryNode) -> list[ArcLayout]:
    """Lay out every node, root included, depth-first.

    Args:
        tree: A SunburstTree or a bare root node

    Returns:
        ArcLayout per node; the root occupies the full circle in the centre ring
    """
    root = tree.root if isinstance(tree, SunburstTree) else tree

    height = max((node.depth for node in root.iter_nodes()), default=0)
    ring = 1 / (height + 1)

    layouts: list[ArcLayout] = []

    def _layout_node(node: CategoryNode, x0: float, x1: float, depth: int) -> None:
        layouts.append(
            ArcLayout(x0=x0, x1=x1, y0=depth * ring, y1=(depth + 1) * ring, node=node)
        )

        children = node.children
        if not children:
            return

        weights = [max(node_weight(child), 0) for child in children]
        total = sum(weights)
        cursor = x0
        for child, weight in zip(children, weights):
            span = (x1 - x0) * weight / total if total > 0 else 0.0
            _layout_node(child, cursor, cursor + span, depth + 1)
            cursor += span

    _layout_node(root, 0.0, FULL_CIRCLE, 0)

    logger.debug(f"Partitioned {len(layouts)} nodes into {height + 1} rings")
    return layouts
