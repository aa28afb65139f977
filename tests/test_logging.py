
"""Tests for logging across modules."""

import json
import logging

from click.testing import CliRunner

from sunburst_chart.cli import main
from sunburst_chart.viz import build_hierarchy, load_dataset


def test_cli_log_level_option():
    """--log-level INFO is accepted."""
    runner = CliRunner()
    result = runner.invoke(main, ["--log-level", "INFO", "render"])
    assert result.exit_code == 0, result.output


def test_cli_log_level_case_insensitive():
    runner = CliRunner()
    result = runner.invoke(main, ["--log-level", "debug", "version"])
    assert result.exit_code == 0, result.output


def test_cli_log_level_invalid():
    runner = CliRunner()
    result = runner.invoke(main, ["--log-level", "LOUD", "version"])
    assert result.exit_code == 2


def test_cli_log_level_from_env(monkeypatch):
    monkeypatch.setenv("SUNBURST_LOG_LEVEL", "INFO")
    runner = CliRunner()
    result = runner.invoke(main, ["version"])
    assert result.exit_code == 0, result.output


def test_render_to_file_logs_info(caplog):
    runner = CliRunner()
    with caplog.at_level(logging.INFO, logger="sunburst_chart.cli"):
        result = runner.invoke(main, ["render", "-f", "json", "-o", "tree.json"])
    assert result.exit_code == 0, result.output
    assert "Wrote json chart to tree.json" in caplog.text


def test_loader_logs_info(tmp_path, caplog):
    path = tmp_path / "d.json"
    path.write_text(json.dumps({"data": [1, 2], "categories": [["a", "b"]]}))
    with caplog.at_level(logging.INFO, logger="sunburst_chart.viz.extraction.loader"):
        load_dataset(path)
    assert "2 items, 1 levels" in caplog.text


def test_node_creation_logged_at_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="sunburst_chart.viz.aggregation.aggregator"):
        build_hierarchy([1], [["a"], ["b"]])
    assert "Created node 'a' at depth 1" in caplog.text
    assert "Created node 'b' at depth 2" in caplog.text


def test_partition_logged_at_debug(portfolio_tree, caplog):
    from sunburst_chart.viz import partition

    with caplog.at_level(logging.DEBUG, logger="sunburst_chart.viz.layout.partition"):
        partition(portfolio_tree)
    assert "Partitioned 7 nodes into 3 rings" in caplog.text
