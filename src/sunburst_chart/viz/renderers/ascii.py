"""ASCII tree renderer using Rich for terminal output."""

from rich.console import Console
from rich.text import Text
from rich.tree import Tree

from sunburst_chart.viz.labels import LabelFormatter, LabelMode
from sunburst_chart.viz.models.tree import CategoryNode, SunburstTree
from sunburst_chart.viz.renderers.base import CategoryColorMap, ColorScheme, OutputFormat


class ASCIIRenderer:
    """Renders a SunburstTree as an indented tree using Rich."""

    format = OutputFormat.ASCII

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
        """Render the tree as ASCII.

        Args:
            tree: The aggregated tree to render
            label_mode: Label view shown next to each category name
            depth: Maximum depth to render
            **options: Additional options (width, etc.)

        Returns:
            ASCII string representation of the tree
        """
        colors = CategoryColorMap(ColorScheme.CATEGORY10_TERMINAL)

        root_label = Text(f"{tree.title}: {tree.root.name}", style="bold")
        root_label.append(f" ({self.formatter.label(tree.root, LabelMode.VALUE, tree.total_sum)})", style="dim")
        rich_tree = Tree(root_label)

        for child in tree.root.children:
            rich_tree.add(
                self._create_rich_tree(
                    child,
                    colors=colors,
                    label_mode=label_mode,
                    total_sum=tree.total_sum,
                    max_depth=depth,
                    current_depth=1,
                )
            )

        console = Console(
            force_terminal=True,
            width=options.get("width", 120),
            record=True,
        )
        console.print(rich_tree)

        return console.export_text()

    def _create_rich_tree(
        self,
        node: CategoryNode,
        *,
        colors: CategoryColorMap,
        label_mode: LabelMode | str,
        total_sum: float,
        max_depth: int | None,
        current_depth: int,
    ) -> Tree:
        """Create a Rich Tree from a CategoryNode."""
        label = Text()
        label.append("● ", style=colors.color_for(str(node.name)))
        label.append(str(node.name))

        # Category mode would only repeat the name
        text = self.formatter.label(node, label_mode, total_sum)
        if text and LabelMode.parse(label_mode) != LabelMode.CATEGORY:
            label.append(f" {text}", style="dim")

        rich_tree = Tree(label)

        if max_depth is None or current_depth < max_depth:
            for child in node.children:
                rich_tree.add(
                    self._create_rich_tree(
                        child,
                        colors=colors,
                        label_mode=label_mode,
                        total_sum=total_sum,
                        max_depth=max_depth,
                        current_depth=current_depth + 1,
                    )
                )

        return rich_tree
