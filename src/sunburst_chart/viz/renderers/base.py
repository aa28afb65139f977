"""Base renderer and output format definitions."""

import threading
from enum import Enum
from typing import Protocol, Union

from sunburst_chart.viz.labels import LabelMode
from sunburst_chart.viz.models.tree import SunburstTree


class OutputFormat(str, Enum):
    """Output format for rendering."""

    ASCII = "ascii"
    JSON = "json"
    SVG = "svg"


class ColorScheme:
    """Color scheme definitions for renderers."""

    # Ten-colour categorical palette
    CATEGORY10 = [
        "#1f77b4",
        "#ff7f0e",
        "#2ca02c",
        "#d62728",
        "#9467bd",
        "#8c564b",
        "#e377c2",
        "#7f7f7f",
        "#bcbd22",
        "#17becf",
    ]

    # Nearest terminal colours for the palette above
    CATEGORY10_TERMINAL = [
        "blue",
        "dark_orange",
        "green",
        "red",
        "medium_purple",
        "orange4",
        "hot_pink",
        "grey50",
        "yellow4",
        "cyan",
    ]


class CategoryColorMap:
    """Assigns a stable color per category name in first-seen order.

    One map lives for one rendered chart. Lookups that assign a new color
    are serialized so a map can be shared by threads.
    """

    def __init__(self, palette: list[str] | None = None) -> None:
        self.palette = list(palette or ColorScheme.CATEGORY10)
        self._colors: dict[str, str] = {}
        self._lock = threading.Lock()

    def color_for(self, name: str) -> str:
        """Get the color for a name, assigning the next palette entry if new."""
        with self._lock:
            color = self._colors.get(name)
            if color is None:
                color = self.palette[len(self._colors) % len(self.palette)]
                self._colors[name] = color
            return color

    def assigned(self) -> dict[str, str]:
        """Snapshot of the names seen so far and their colors."""
        with self._lock:
            return dict(self._colors)

    def __len__(self) -> int:
        return len(self._colors)


class TreeRenderer(Protocol):
    """Protocol for tree renderers."""

    format: OutputFormat

    def render(
        self,
        tree: SunburstTree,
        *,
        label_mode: LabelMode | str = LabelMode.VALUE,
        depth: int | None = None,
        **options,
    ) -> Union[str, bytes]:
        """Render the tree to the target format.

        Args:
            tree: The aggregated tree to render
            label_mode: Which label view to show per node
            depth: Maximum depth to render (None for unlimited)
            **options: Additional format-specific options

        Returns:
            Rendered output
        """
        ...
