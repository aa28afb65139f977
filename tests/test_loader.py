
"""Tests for dataset loading from files and query strings."""

import json
from urllib.parse import urlencode

import pytest

from sunburst_chart.viz import (
    DEFAULT_DATASET,
    DatasetLoadError,
    DatasetShapeError,
    dataset_from_query,
    load_dataset,
)
from sunburst_chart.viz.extraction.loader import dataset_from_dict, parse_query_param

PORTFOLIO = {
    "title": "Portfolio",
    "data": [5000, 10000, 3000, 7000],
    "categories": [
        ["Interest", "Shares", "Interest", "Shares"],
        ["High Yield", "Global Index", "Bonds", "Value Stocks"],
    ],
}


class TestDatasetFromDict:
    """Tests for building datasets from document mappings."""

    def test_full_document(self):
        dataset = dataset_from_dict(PORTFOLIO)
        assert dataset.title == "Portfolio"
        assert dataset.total_sum == 25000
        assert dataset.level_count == 2

    def test_aliases(self):
        dataset = dataset_from_dict({"values": [1, 2], "category_levels": [["a", "b"]]})
        assert dataset.values == (1, 2)

    def test_missing_keys_fall_back_to_default(self):
        assert dataset_from_dict({}) == DEFAULT_DATASET

    def test_not_a_mapping(self):
        with pytest.raises(DatasetLoadError, match="must be a mapping"):
            dataset_from_dict([1, 2, 3])

    def test_data_not_a_list(self):
        with pytest.raises(DatasetLoadError, match="'data' must be a list"):
            dataset_from_dict({"data": 5, "categories": [["a"]]})

    def test_categories_not_a_list(self):
        with pytest.raises(DatasetLoadError, match="'categories' must be a list"):
            dataset_from_dict({"data": [5], "categories": "a"})

    def test_shape_errors_propagate(self):
        with pytest.raises(DatasetShapeError):
            dataset_from_dict({"data": [1, 2], "categories": [["a"]]})


class TestLoadDataset:
    """Tests for load_dataset."""

    def test_json_file(self, tmp_path):
        path = tmp_path / "portfolio.json"
        path.write_text(json.dumps(PORTFOLIO))
        assert load_dataset(path).title == "Portfolio"

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "portfolio.yaml"
        path.write_text(
            "title: Portfolio\n"
            "data: [5000, 10000, 3000, 7000]\n"
            "categories:\n"
            "  - [Interest, Shares, Interest, Shares]\n"
            "  - [High Yield, Global Index, Bonds, Value Stocks]\n"
        )
        dataset = load_dataset(path)
        assert dataset.total_sum == 25000
        assert dataset.category_levels[1][1] == "Global Index"

    def test_empty_yaml_uses_default(self, tmp_path):
        path = tmp_path / "empty.yml"
        path.write_text("")
        assert load_dataset(path) == DEFAULT_DATASET

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(DatasetLoadError, match="Invalid JSON"):
            load_dataset(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("data: [1, 2\n")
        with pytest.raises(DatasetLoadError, match="Invalid YAML"):
            load_dataset(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(DatasetLoadError, match="Error reading"):
            load_dataset(tmp_path / "missing.json")


class TestQueryParams:
    """Tests for URL query decoding."""

    def test_parse_query_param_list(self):
        assert parse_query_param({"data": ["[1, 2]"]}, "data") == [1, 2]

    def test_parse_query_param_absent_or_empty(self):
        assert parse_query_param({}, "data") is None
        assert parse_query_param({"data": [""]}, "data") is None
        assert parse_query_param({"data": []}, "data") is None

    def test_parse_query_param_invalid(self):
        with pytest.raises(DatasetLoadError, match="'data' is not valid JSON"):
            parse_query_param({"data": "[1,"}, "data")

    def test_query_string(self):
        query = urlencode({
            "data": json.dumps(PORTFOLIO["data"]),
            "categories": json.dumps(PORTFOLIO["categories"]),
            "title": json.dumps("Portfolio"),
        })
        dataset = dataset_from_query("?" + query)
        assert dataset.title == "Portfolio"
        assert dataset.total_sum == 25000

    def test_bare_title(self):
        """A title that is not JSON is used verbatim."""
        dataset = dataset_from_query(urlencode({"title": "My Money"}))
        assert dataset.title == "My Money"

    def test_empty_query_uses_default(self):
        assert dataset_from_query("") == DEFAULT_DATASET

    def test_mapping_with_none(self):
        dataset = dataset_from_query({"data": None, "categories": None, "title": None})
        assert dataset == DEFAULT_DATASET

    def test_invalid_data(self):
        with pytest.raises(DatasetLoadError):
            dataset_from_query(urlencode({"data": "[1, 2"}))
