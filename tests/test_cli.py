"""Tests for the command-line interface."""

import json
import xml.etree.ElementTree as ET

import pytest
from click.testing import CliRunner
from openpyxl import Workbook

from gantt_chart.cli import cli, main

SVG_NS = "{http://www.w3.org/2000/svg}"
PROJECT = {
    "name": "Relaunch",
    "start_date": "2024-11-04",
    "resources": [
        {
            "name": "Design",
            "tasks": [
                {"name": "Wireframes", "days": 3, "done": True},
                {"name": "Sign-off", "days": 0},
            ],
        },
        {"name": "Dev", "tasks": [{"name": "API", "days": 5}]},
        {"name": "Idle", "tasks": []},
    ],
}


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def project_file(tmp_path):
    path = tmp_path / "project.json"
    path.write_text(json.dumps(PROJECT))
    return path


@pytest.fixture
def chart_config(tmp_path):
    # Never exists unless a test writes it, so the defaults apply
    return str(tmp_path / "chart_config.json")


class TestRender:
    """Tests for the render command."""

    def test_render(self, runner, project_file, chart_config, tmp_path):
        """Test rendering writes an SVG file."""
        output = tmp_path / "chart.svg"
        result = runner.invoke(
            cli, ["-c", chart_config, "render", str(project_file), "-o", str(output)]
        )
        assert result.exit_code == 0, result.output
        assert "Wrote" in result.output
        assert output.read_text(encoding="utf-8").startswith("<svg")

    def test_render_options(self, runner, project_file, chart_config, tmp_path):
        """Test the chart options reach the drawing."""
        output = tmp_path / "chart.svg"
        result = runner.invoke(
            cli,
            [
                "-c", chart_config,
                "render", str(project_file),
                "-o", str(output),
                "--resource-table",
                "--hide-empty",
                "--today", "2024-11-06",
            ],
        )
        assert result.exit_code == 0, result.output
        svg = output.read_text(encoding="utf-8")
        assert "Idle" not in svg.split('id="legend"')[0]
        assert "<line" in svg.split('id="date-line"')[1].split("</g>")[0]
        assert ">Resource<" in svg

    def test_render_uses_config_file(self, runner, project_file, tmp_path):
        """Test the chart config file is read."""
        config_path = tmp_path / "chart_config.json"
        config_path.write_text(json.dumps({"show_legend": False}))
        output = tmp_path / "chart.svg"
        result = runner.invoke(
            cli, ["-c", str(config_path), "render", str(project_file), "-o", str(output)]
        )
        assert result.exit_code == 0, result.output
        root = ET.fromstring(output.read_text(encoding="utf-8"))
        legend = next(g for g in root.iter(f"{SVG_NS}g") if g.get("id") == "legend")
        assert len(legend) == 0

    def test_invalid_config(self, runner, project_file, tmp_path):
        """Test unknown config keys stop the render."""
        config_path = tmp_path / "chart_config.json"
        config_path.write_text(json.dumps({"colour": "red"}))
        result = runner.invoke(
            cli, ["-c", str(config_path), "render", str(project_file), "-o", str(tmp_path / "c.svg")]
        )
        assert result.exit_code == 1
        assert "Invalid chart configuration" in result.output

    def test_negative_duration(self, runner, chart_config, tmp_path):
        """Test scheduling errors exit with status 1 and no file."""
        path = tmp_path / "bad.json"
        path.write_text(
            json.dumps({"name": "Bad", "resources": [{"name": "A", "tasks": [{"name": "t", "days": -1}]}]})
        )
        output = tmp_path / "chart.svg"
        result = runner.invoke(cli, ["-c", chart_config, "render", str(path), "-o", str(output)])
        assert result.exit_code == 1
        assert "negative duration" in result.output
        assert not output.exists()

    def test_invalid_project_file(self, runner, chart_config, tmp_path):
        """Test malformed JSON is reported."""
        path = tmp_path / "bad.json"
        path.write_text("{")
        result = runner.invoke(
            cli, ["-c", chart_config, "render", str(path), "-o", str(tmp_path / "c.svg")]
        )
        assert result.exit_code == 1
        assert "JSON" in result.output

    def test_bad_reference_date(self, runner, project_file, chart_config, tmp_path):
        """Test an unparseable --today is a usage error."""
        result = runner.invoke(
            cli,
            ["-c", chart_config, "render", str(project_file), "-o", str(tmp_path / "c.svg"), "--today", "soon"],
        )
        assert result.exit_code == 2


class TestShowAndExport:
    """Tests for the show and export commands."""

    def test_show(self, runner, project_file, chart_config):
        """Test the schedule and statistics are printed."""
        result = runner.invoke(cli, ["-c", chart_config, "show", str(project_file)])
        assert result.exit_code == 0, result.output
        assert "Wireframes" in result.output
        assert "Resource Statistics" in result.output

    def test_export(self, runner, project_file, chart_config, tmp_path):
        """Test CSV and HTML exports are written."""
        csv_path = tmp_path / "schedule.csv"
        html_path = tmp_path / "timeline.html"
        result = runner.invoke(
            cli,
            [
                "-c", chart_config,
                "export", str(project_file),
                "--csv", str(csv_path),
                "--html", str(html_path),
            ],
        )
        assert result.exit_code == 0, result.output
        assert csv_path.read_text().startswith("resource,task,start")
        assert html_path.exists()

    def test_export_nothing(self, runner, project_file, chart_config):
        """Test export without targets only prints a hint."""
        result = runner.invoke(cli, ["-c", chart_config, "export", str(project_file)])
        assert result.exit_code == 0
        assert "Nothing to export" in result.output


class TestInitAndImport:
    """Tests for creating and importing project files."""

    def test_init(self, runner, chart_config, tmp_path):
        """Test init writes a sample project and refuses to overwrite."""
        path = tmp_path / "project.json"
        result = runner.invoke(cli, ["-c", chart_config, "init", "-p", str(path)])
        assert result.exit_code == 0
        assert json.loads(path.read_text())["resources"]

        path.write_text("{}")
        result = runner.invoke(cli, ["-c", chart_config, "init", "-p", str(path)])
        assert "already" in result.output
        assert path.read_text() == "{}"

        result = runner.invoke(cli, ["-c", chart_config, "init", "-p", str(path), "--force"])
        assert json.loads(path.read_text())["resources"]

    def test_import(self, runner, chart_config, tmp_path):
        """Test importing a workbook into a new project file."""
        wb = Workbook()
        sheet = wb.active
        sheet.append(["Resource", "Task", "Days"])
        sheet.append(["Dev", "API", 5])
        sheet.append(["QA", "Regression", 3])
        excel = tmp_path / "tasks.xlsx"
        wb.save(excel)

        project = tmp_path / "project.json"
        result = runner.invoke(
            cli,
            [
                "-c", chart_config,
                "import", str(excel),
                "-p", str(project),
                "--import-config", str(tmp_path / "import_config.json"),
            ],
        )
        assert result.exit_code == 0, result.output
        assert "Found 2 tasks" in result.output
        data = json.loads(project.read_text())
        assert [r["name"] for r in data["resources"]] == ["Dev", "QA"]

    def test_init_import_config(self, runner, chart_config, tmp_path):
        """Test the default import configuration is written."""
        path = tmp_path / "import_config.json"
        result = runner.invoke(
            cli, ["-c", chart_config, "init-import-config", "--import-config", str(path)]
        )
        assert result.exit_code == 0
        assert json.loads(path.read_text())["column_mapping"]["name"] == "Task"


class TestMain:
    """Tests for the entry point's exit codes."""

    def test_success(self, project_file, chart_config, tmp_path):
        """Test a successful render returns 0."""
        output = tmp_path / "chart.svg"
        assert main(["-c", chart_config, "render", str(project_file), "-o", str(output)]) == 0
        assert output.exists()

    def test_failure(self, chart_config, tmp_path):
        """Test a failed render returns 1."""
        path = tmp_path / "bad.json"
        path.write_text("[]")
        assert main(["-c", chart_config, "render", str(path), "-o", str(tmp_path / "c.svg")]) == 1

    def test_usage_error(self, chart_config, tmp_path):
        """Test a missing input file is a usage error."""
        code = main(["-c", chart_config, "render", str(tmp_path / "nope.json"), "-o", "c.svg"])
        assert code == 2
