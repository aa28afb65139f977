"""Data models for the visualization system."""

from sunburst_chart.viz.models.dataset import (
    DEFAULT_DATASET,
    Dataset,
    DatasetError,
    DatasetShapeError,
    InvalidValueError,
)
from sunburst_chart.viz.models.tree import (
    DEFAULT_ROOT_LABEL,
    CategoryNode,
    SunburstTree,
)

__all__ = [
    "DEFAULT_DATASET",
    "DEFAULT_ROOT_LABEL",
    "Dataset",
    "DatasetError",
    "DatasetShapeError",
    "InvalidValueError",
    "CategoryNode",
    "SunburstTree",
]
