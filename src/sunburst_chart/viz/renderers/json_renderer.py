"""JSON renderer for category trees."""

import json
from typing import Any

from sunburst_chart.viz.labels import LabelFormatter, LabelMode
from sunburst_chart.viz.models.tree import CategoryNode, SunburstTree
from sunburst_chart.viz.renderers.base import OutputFormat


class JSONRenderer:
    """Renders a SunburstTree as JSON, each node carrying its label."""

    format = OutputFormat.JSON

    def __init__(self) -> None:
        self.formatter = LabelFormatter()

    def render(
        self,
        tree: SunburstTree,
        *,
        label_mode: LabelMode | str = LabelMode.VALUE,
        depth: int | None = None,
        **options,
    ) -> str:
        """Render the tree as JSON.

        Args:
            tree: The aggregated tree to render
            label_mode: Label view stored under each node's "label" key
            depth: Maximum depth to render
            **options: Additional options (indent, etc.)

        Returns:
            JSON string representation of the tree
        """
        data = tree.to_dict()
        mode = LabelMode.parse(label_mode)
        data["labelMode"] = mode.value if mode else str(label_mode)
        data["root"] = self._node_dict(
            tree.root,
            label_mode=label_mode,
            total_sum=tree.total_sum,
            max_depth=depth,
            current_depth=0,
        )

        indent = options.get("indent", 2)
        return json.dumps(data, indent=indent, default=str)

    def _node_dict(
        self,
        node: CategoryNode,
        *,
        label_mode: LabelMode | str,
        total_sum: float,
        max_depth: int | None,
        current_depth: int,
    ) -> dict[str, Any]:
        result = node.to_dict(include_children=False)
        result["label"] = self.formatter.label(node, label_mode, total_sum)

        if max_depth is not None and current_depth >= max_depth:
            if node.children:
                result["childrenCount"] = len(node.children)
                result["childrenTruncated"] = True
            return result

        result["children"] = [
            self._node_dict(
                child,
                label_mode=label_mode,
                total_sum=total_sum,
                max_depth=max_depth,
                current_depth=current_depth + 1,
            )
            for child in node.children
        ]
        return result
