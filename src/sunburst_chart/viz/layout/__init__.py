"""Geometry for radial charts."""

from sunburst_chart.viz.layout.partition import (
    FULL_CIRCLE,
    ArcLayout,
    node_weight,
    partition,
)

__all__ = [
    "FULL_CIRCLE",
    "ArcLayout",
    "node_weight",
    "partition",
]
