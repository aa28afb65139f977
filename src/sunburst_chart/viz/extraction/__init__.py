"""Dataset input providers."""

from sunburst_chart.viz.extraction.loader import (
    DatasetLoadError,
    dataset_from_dict,
    dataset_from_query,
    load_dataset,
    parse_query_param,
)

__all__ = [
    "DatasetLoadError",
    "dataset_from_dict",
    "dataset_from_query",
    "load_dataset",
    "parse_query_param",
]
