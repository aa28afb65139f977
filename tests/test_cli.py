# Copyright 2026 Pennyworth Technologies, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.


"""Tests for the sunburst CLI."""

import json

from click.testing import CliRunner

from sunburst_chart import __version__
from sunburst_chart.cli import main
from sunburst_chart.config import PROJECT_CONFIG_NAME

VALUES = [5000, 10000, 3000, 7000]
LEVELS = [
    ["Interest", "Shares", "Interest", "Shares"],
    ["High Yield", "Global Index", "Bonds", "Value Stocks"],
]
INLINE = ["--data", json.dumps(VALUES), "--categories", json.dumps(LEVELS)]


def _top_level_names(output: str) -> list[str]:
    return [child["name"] for child in json.loads(output)["root"]["children"]]


def test_version():
    runner = CliRunner()
    result = runner.invoke(main, ["version"])
    assert result.exit_code == 0
    assert f"sunburst-chart {__version__}" in result.output


# -----------------------------------------------------------------------------
# render
# -----------------------------------------------------------------------------


class TestRender:
    """Tests for the render command."""

    def test_default_dataset_ascii(self):
        runner = CliRunner()
        result = runner.invoke(main, ["render"])
        assert result.exit_code == 0, result.output
        assert "Investments" in result.output
        assert "High Yield" in result.output

    def test_inline_json(self):
        runner = CliRunner()
        result = runner.invoke(main, ["render", *INLINE, "--format", "json", "--mode", "percentage"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["labelMode"] == "percentage"
        assert data["root"]["children"][0]["label"] == "32.00%"

    def test_title(self):
        runner = CliRunner()
        result = runner.invoke(main, ["render", *INLINE, "--title", "Savings", "-f", "json"])
        assert json.loads(result.output)["title"] == "Savings"

    def test_svg_to_file(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, ["render", "--format", "svg", "-o", "chart.svg"])
        assert result.exit_code == 0, result.output
        assert "Wrote" in result.output
        assert (tmp_path / "chart.svg").read_text().startswith("<svg")

    def test_svg_uses_config_size(self, tmp_path):
        (tmp_path / PROJECT_CONFIG_NAME).write_text(json.dumps({"chart": {"width": 400}}))
        runner = CliRunner()
        result = runner.invoke(main, ["render", "-f", "svg"])
        assert result.exit_code == 0, result.output
        assert 'width="400"' in result.output

    def test_yaml_input(self, tmp_path):
        path = tmp_path / "portfolio.yaml"
        path.write_text(
            "title: Portfolio\n"
            "data: [5000, 10000, 3000, 7000]\n"
            "categories:\n"
            "  - [Interest, Shares, Interest, Shares]\n"
            "  - [High Yield, Global Index, Bonds, Value Stocks]\n"
        )
        runner = CliRunner()
        result = runner.invoke(main, ["render", str(path), "-f", "json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["title"] == "Portfolio"
        assert data["totalSum"] == 25000

    def test_level_order_option(self):
        """--level-order leaf-first puts the last level next to the root."""
        runner = CliRunner()
        result = runner.invoke(main, ["--level-order", "leaf-first", "render", "-f", "json"])
        assert result.exit_code == 0, result.output
        assert _top_level_names(result.output) == ["Interest", "Shares"]

    def test_order_option(self):
        runner = CliRunner()
        result = runner.invoke(main, ["render", "--order", "1,0", "-f", "json"])
        assert result.exit_code == 0, result.output
        assert _top_level_names(result.output) == ["Interest", "Shares"]

    def test_order_not_integers(self):
        runner = CliRunner()
        result = runner.invoke(main, ["render", "--order", "a,b"])
        assert result.exit_code == 2
        assert "comma-separated level indices" in result.output

    def test_order_not_permutation(self):
        runner = CliRunner()
        result = runner.invoke(main, ["render", "--order", "0,0"])
        assert result.exit_code == 1
        assert "not a permutation" in result.output

    def test_root_label_option(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--root-label", "Everything", "render", "-f", "json"])
        assert json.loads(result.output)["root"]["name"] == "Everything"

    def test_shape_error(self):
        runner = CliRunner()
        result = runner.invoke(main, ["render", "--data", "[1, 2]", "--categories", '[["a"]]'])
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_reject_duplicates(self):
        runner = CliRunner()
        result = runner.invoke(main, [
            "--duplicates", "reject",
            "render", "--data", "[1, 2]", "--categories", '[["a", "a"]]',
        ])
        assert result.exit_code == 1
        assert "share the category path" in result.output

    def test_depth(self):
        runner = CliRunner()
        result = runner.invoke(main, ["render", *INLINE, "--depth", "1"])
        assert result.exit_code == 0, result.output
        assert "Interest" in result.output
        assert "High Yield" not in result.output


# -----------------------------------------------------------------------------
# labels / table
# -----------------------------------------------------------------------------


class TestLabels:
    """Tests for the labels command."""

    def test_json(self):
        runner = CliRunner()
        result = runner.invoke(main, ["labels", *INLINE, "--mode", "percentage", "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["mode"] == "percentage"
        assert data["totalSum"] == 25000
        assert data["labels"][0] == {
            "path": ["Interest"],
            "name": "Interest",
            "depth": 1,
            "text": "32.00%",
        }

    def test_default_mode_from_config(self, tmp_path):
        (tmp_path / PROJECT_CONFIG_NAME).write_text(
            json.dumps({"chart": {"label_mode": "category"}})
        )
        runner = CliRunner()
        result = runner.invoke(main, ["labels", *INLINE, "--json"])
        assert json.loads(result.output)["mode"] == "category"

    def test_table(self):
        runner = CliRunner()
        result = runner.invoke(main, ["labels", *INLINE, "--mode", "value"])
        assert result.exit_code == 0, result.output
        assert "8000.00" in result.output


def test_table_command():
    runner = CliRunner()
    result = runner.invoke(main, ["table", *INLINE])
    assert result.exit_code == 0, result.output
    assert "Category 1" in result.output
    assert "Value" in result.output
    assert "10000" in result.output


# -----------------------------------------------------------------------------
# config
# -----------------------------------------------------------------------------


class TestConfigCommands:
    """Tests for config show / init."""

    def test_show(self):
        runner = CliRunner()
        result = runner.invoke(main, ["config", "show"])
        assert result.exit_code == 0
        assert json.loads(result.output)["chart"]["label_mode"] == "value"

    def test_show_applies_cli_flags(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--duplicates", "sum", "config", "show"])
        assert json.loads(result.output)["chart"]["duplicate_paths"] == "sum"

    def test_init(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, ["config", "init"])
        assert result.exit_code == 0, result.output
        data = json.loads((tmp_path / PROJECT_CONFIG_NAME).read_text())
        assert data["server"]["port"] == 8050

    def test_init_refuses_overwrite(self, tmp_path):
        (tmp_path / PROJECT_CONFIG_NAME).write_text("{}")
        runner = CliRunner()
        result = runner.invoke(main, ["config", "init"])
        assert result.exit_code == 1
        assert (tmp_path / PROJECT_CONFIG_NAME).read_text() == "{}"

        result = runner.invoke(main, ["config", "init", "--force"])
        assert result.exit_code == 0
        assert "chart" in json.loads((tmp_path / PROJECT_CONFIG_NAME).read_text())

    def test_missing_config_file(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--config", "missing.json", "version"])
        assert result.exit_code == 1
        assert "Config file not found" in result.output

    def test_invalid_config(self, tmp_path):
        (tmp_path / PROJECT_CONFIG_NAME).write_text(
            json.dumps({"chart": {"label_mode": "loud"}})
        )
        runner = CliRunner()
        result = runner.invoke(main, ["version"])
        assert result.exit_code == 1
        assert "Invalid label_mode" in result.output

    def test_config_section_not_an_object(self, tmp_path):
        (tmp_path / PROJECT_CONFIG_NAME).write_text(json.dumps({"chart": []}))
        runner = CliRunner()
        result = runner.invoke(main, ["version"])
        assert result.exit_code == 1
        assert "chart config must be an object" in result.output
        assert not isinstance(result.exception, AttributeError)


def test_serve(monkeypatch):
    """serve hands the app to uvicorn with the resolved host and port."""
    calls = {}

    def fake_run(app, host, port, **kwargs):
        calls.update(app=app, host=host, port=port)

    monkeypatch.setattr("uvicorn.run", fake_run)
    runner = CliRunner()
    result = runner.invoke(main, ["serve", "--port", "9000"])
    assert result.exit_code == 0, result.output
    assert calls["host"] == "localhost"
    assert calls["port"] == 9000
    assert calls["app"].title == "Sunburst Chart"
