"""Aggregation engine for building the category tree."""

from sunburst_chart.viz.aggregation.aggregator import (
    DuplicatePathError,
    DuplicatePathPolicy,
    HierarchyAggregator,
    LevelOrder,
    aggregate_dataset,
    build_hierarchy,
)

__all__ = [
    "DuplicatePathError",
    "DuplicatePathPolicy",
    "HierarchyAggregator",
    "LevelOrder",
    "aggregate_dataset",
    "build_hierarchy",
]
