"""Pytest configuration and shared fixtures for sunburst-chart tests."""

from pathlib import Path

import pytest

from sunburst_chart.config import (
    ENV_DUPLICATE_PATHS,
    ENV_HEIGHT,
    ENV_HOST,
    ENV_LABEL_MODE,
    ENV_LABEL_MODE_DEPRECATED,
    ENV_LEVEL_ORDER,
    ENV_PORT,
    ENV_ROOT_LABEL,
    ENV_TITLE,
    ENV_WIDTH,
)
from sunburst_chart.viz import Dataset, aggregate_dataset

PROJECT_ROOT = Path(__file__).parent.parent

PORTFOLIO_VALUES = [5000, 10000, 3000, 7000]
BROAD = ["Interest", "Shares", "Interest", "Shares"]
SPECIFIC = ["High Yield", "Global Index", "Bonds", "Value Stocks"]


@pytest.fixture(autouse=True)
def _isolate_environment(tmp_path, monkeypatch):
    """Keep tests away from the user's config files and SUNBURST_* env vars."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    for name in (
        ENV_TITLE,
        ENV_ROOT_LABEL,
        ENV_LABEL_MODE,
        ENV_LABEL_MODE_DEPRECATED,
        ENV_WIDTH,
        ENV_HEIGHT,
        ENV_DUPLICATE_PATHS,
        ENV_LEVEL_ORDER,
        ENV_HOST,
        ENV_PORT,
        "SUNBURST_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def portfolio_dataset():
    """Four investments, broad category next to the root."""
    return Dataset(
        values=PORTFOLIO_VALUES,
        category_levels=[BROAD, SPECIFIC],
        title="Portfolio",
    )


@pytest.fixture
def portfolio_tree(portfolio_dataset):
    return aggregate_dataset(portfolio_dataset)


@pytest.fixture
def three_level_dataset():
    """Same names reused under different parents at several depths."""
    return Dataset(
        values=[1, 2, 3, 4, 5, 6],
        category_levels=[
            ["EU", "EU", "US", "US", "EU", "Asia"],
            ["Tech", "Energy", "Tech", "Tech", "Tech", "Energy"],
            ["A", "B", "A", "C", "C", "A"],
        ],
        title="Regions",
    )
