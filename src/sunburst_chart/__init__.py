"""sunburst-chart: aggregate flat category data into sunburst charts."""

__version__ = "0.3.0"
