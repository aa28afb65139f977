"""Load datasets from files, URL query strings or plain mappings.

Documents look like::

    title: Portfolio
    data: [5000, 10000, 3000, 7000]
    categories:
      - [High Yield, Global Index, Bonds, Value Stocks]
      - [Interest, Shares, Interest, Shares]

``values`` and ``category_levels`` are accepted as aliases. Missing keys fall
back to the default dataset.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping
from urllib.parse import parse_qs

import yaml

from sunburst_chart.viz.models.dataset import DEFAULT_DATASET, Dataset, DatasetError

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")

# Query parameter names
PARAM_TITLE = "title"
PARAM_DATA = "data"
PARAM_CATEGORIES = "categories"


class DatasetLoadError(DatasetError):
    """Raised when a dataset document cannot be read or parsed."""

    pass


def dataset_from_dict(data: Mapping[str, Any], default: Dataset = DEFAULT_DATASET) -> Dataset:
    """Build a Dataset from a document mapping.

    Raises:
        DatasetLoadError: If the document is not a mapping
        DatasetError: If the arrays are malformed
    """
    if not isinstance(data, Mapping):
        raise DatasetLoadError(
            f"Dataset document must be a mapping, got {type(data).__name__}"
        )

    values = _first_present(data, PARAM_DATA, "values")
    categories = _first_present(data, PARAM_CATEGORIES, "category_levels")
    title = data.get(PARAM_TITLE)

    if values is None:
        values = default.values
    if categories is None:
        categories = default.category_levels
    if not title:
        title = default.title

    if not isinstance(values, (list, tuple)):
        raise DatasetLoadError(f"'data' must be a list of numbers, got {type(values).__name__}")
    if not isinstance(categories, (list, tuple)):
        raise DatasetLoadError(
            f"'categories' must be a list of levels, got {type(categories).__name__}"
        )

    return Dataset(values=values, category_levels=categories, title=str(title))


def _first_present(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def load_dataset(path: Path) -> Dataset:
    """Load a dataset from a JSON or YAML file.

    Args:
        path: Document path; .yaml/.yml are parsed as YAML, anything else as JSON

    Raises:
        DatasetLoadError: If the file cannot be read or parsed
    """
    try:
        content = path.read_text()
    except OSError as e:
        raise DatasetLoadError(f"Error reading {path}: {e}")

    if path.suffix.lower() in YAML_SUFFIXES:
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise DatasetLoadError(f"Invalid YAML in {path}: {e}")
    else:
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise DatasetLoadError(f"Invalid JSON in {path}: {e}")

    if data is None:
        data = {}

    dataset = dataset_from_dict(data)
    logger.info(f"Loaded dataset from {path}: {dataset.item_count} items, {dataset.level_count} levels")
    return dataset


def parse_query_param(params: Mapping[str, Any], name: str) -> Any:
    """Decode one JSON-encoded query parameter.

    Args:
        params: Parsed query mapping; values may be strings or lists of strings
        name: Parameter name

    Returns:
        The decoded value, or None when the parameter is absent or empty

    Raises:
        DatasetLoadError: If the parameter is not valid JSON
    """
    raw = params.get(name)
    if isinstance(raw, (list, tuple)):
        raw = raw[0] if raw else None
    if not raw:
        return None

    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as e:
        raise DatasetLoadError(f"Query parameter '{name}' is not valid JSON: {e}")

    logger.debug(f"Query param [{name}]: {parsed!r}")
    return parsed


def dataset_from_query(query: str | Mapping[str, Any]) -> Dataset:
    """Build a Dataset from URL query parameters.

    ``data`` and ``categories`` are URL-encoded JSON arrays. ``title`` may be
    JSON or a bare string. Absent parameters fall back to the defaults.

    Args:
        query: Raw query string (with or without a leading "?") or a mapping
    """
    if isinstance(query, str):
        params: Mapping[str, Any] = parse_qs(query.lstrip("?"))
    else:
        params = query

    values = parse_query_param(params, PARAM_DATA)
    categories = parse_query_param(params, PARAM_CATEGORIES)

    try:
        title = parse_query_param(params, PARAM_TITLE)
    except DatasetLoadError:
        raw = params.get(PARAM_TITLE)
        title = raw[0] if isinstance(raw, (list, tuple)) else raw

    return dataset_from_dict(
        {
            PARAM_DATA: values,
            PARAM_CATEGORIES: categories,
            PARAM_TITLE: title,
        }
    )
