"""Renderers for visualizing category trees."""

from sunburst_chart.viz.renderers.base import (
    CategoryColorMap,
    ColorScheme,
    OutputFormat,
    TreeRenderer,
)
from sunburst_chart.viz.renderers.ascii import ASCIIRenderer
from sunburst_chart.viz.renderers.json_renderer import JSONRenderer
from sunburst_chart.viz.renderers.svg import SVGRenderer

__all__ = [
    "OutputFormat",
    "TreeRenderer",
    "ColorScheme",
    "CategoryColorMap",
    "ASCIIRenderer",
    "JSONRenderer",
    "SVGRenderer",
]
