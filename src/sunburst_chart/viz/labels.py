"""Label views over a built category tree.

Labels are a read-only projection: switching the label mode means calling
``render_labels`` again with the new mode, never rebuilding the tree.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from sunburst_chart.viz.models.tree import CategoryNode, SunburstTree


class LabelMode(str, Enum):
    """Which derived view a node label shows."""

    CATEGORY = "category"
    VALUE = "value"
    PERCENTAGE = "percentage"

    @classmethod
    def parse(cls, text: Any) -> "LabelMode | None":
        """Return the mode named by text, or None if it names no mode."""
        if isinstance(text, cls):
            return text
        try:
            return cls(text)
        except ValueError:
            return None


VALID_LABEL_MODES = tuple(mode.value for mode in LabelMode)


def percentage_of(amount: float, total_sum: float) -> float:
    """Share of the global total in percent; 0 when the total is 0."""
    if total_sum == 0:
        return 0.0
    return amount / total_sum * 100


class LabelFormatter:
    """Computes the display string for a node under a label mode."""

    def label(self, node: CategoryNode, mode: LabelMode | str, total_sum: float) -> str:
        """Format a node's label.

        Args:
            node: The node to label
            mode: "category", "value" or "percentage"; anything else gives ""
            total_sum: Global total used as the percentage denominator

        Returns:
            The label text
        """
        parsed = LabelMode.parse(mode)
        if parsed == LabelMode.CATEGORY:
            return str(node.name)
        if parsed == LabelMode.VALUE:
            return f"{node.display_value:.2f}"
        if parsed == LabelMode.PERCENTAGE:
            return f"{percentage_of(node.display_value, total_sum):.2f}%"
        return ""

    def tooltip(self, node: CategoryNode, mode: LabelMode | str, total_sum: float) -> str:
        """Hover text: the name, plus the value or share for those modes."""
        parsed = LabelMode.parse(mode)
        # Subtree total, even on leaves; falls back to the own value when 0
        amount = node.total_value or node.value or 0
        lines = [str(node.name)]
        if parsed == LabelMode.VALUE:
            lines.append(f"Value: {amount}")
        elif parsed == LabelMode.PERCENTAGE:
            lines.append(f"({percentage_of(amount, total_sum):.2f}%)")
        return "\n".join(lines)


@dataclass(frozen=True)
class NodeLabel:
    """One rendered label."""

    path: tuple[str, ...]
    name: str
    depth: int
    text: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": list(self.path),
            "name": self.name,
            "depth": self.depth,
            "text": self.text,
        }


_formatter = LabelFormatter()


def format_label(node: CategoryNode, mode: LabelMode | str, total_sum: float) -> str:
    """Module-level shortcut for LabelFormatter().label."""
    return _formatter.label(node, mode, total_sum)


def render_labels(
    tree: SunburstTree,
    mode: LabelMode | str,
    total_sum: float | None = None,
) -> list[NodeLabel]:
    """Label every displayed node (root excluded) in depth-first order.

    Args:
        tree: The aggregated tree
        mode: Label mode
        total_sum: Percentage denominator; defaults to tree.total_sum
    """
    if total_sum is None:
        total_sum = tree.total_sum
    return [
        NodeLabel(
            path=node.path,
            name=str(node.name),
            depth=node.depth,
            text=_formatter.label(node, mode, total_sum),
        )
        for node in tree.descendants()
    ]
