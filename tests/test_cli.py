"""
Tests for CLI commands — check, plan, and global options.
"""

import json
import textwrap
from pathlib import Path

from click.testing import CliRunner

from buildplan.main import cli


def _write(tmp_path: Path, content: str, name: str = "buildplan.yml") -> Path:
    path = tmp_path / name
    path.write_text(textwrap.dedent(content))
    return path


CYCLIC = """\
    modules:
      - name: A
        dependencies: [B]
      - name: B
        dependencies: [A]
"""


class TestCLIGlobal:
    """Tests for global CLI behavior."""

    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "build plan" in result.output

    def test_version(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestCheckCommand:
    """Tests for the check command."""

    def test_valid(self, descriptor_yml: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(descriptor_yml), "check"])
        assert result.exit_code == 0
        assert "valid" in result.output.lower()
        assert "Modules: 2" in result.output

    def test_valid_json(self, descriptor_yml: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["check", str(descriptor_yml), "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["valid"] is True
        assert data["module_count"] == 2
        assert data["violations"] == []

    def test_cycle_reported(self, tmp_path: Path):
        config = _write(tmp_path, CYCLIC)
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config), "check"])
        assert result.exit_code == 1
        assert "cyclic_dependency" in result.output
        assert "A,B" in result.output

    def test_all_violations_json(self, tmp_path: Path):
        config = _write(tmp_path, """\
            - name: a
            - name: a
            - plugins: [java]
        """)
        runner = CliRunner()
        result = runner.invoke(cli, ["check", str(config), "--json"])
        assert result.exit_code == 1
        data = json.loads(result.output)
        kinds = sorted(v["kind"] for v in data["violations"])
        assert kinds == ["duplicate_module", "malformed_record"]

    def test_missing_config(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        runner = CliRunner()
        result = runner.invoke(cli, ["check"])
        assert result.exit_code == 1
        assert "No buildplan.yml" in result.output

    def test_warnings_shown(self, tmp_path: Path):
        config = _write(tmp_path, """\
            - name: lib
              testSuites:
                - name: test
        """)
        runner = CliRunner()
        result = runner.invoke(cli, ["check", str(config)])
        assert result.exit_code == 0
        assert "no toolchain floor" in result.output


class TestPlanCommand:
    """Tests for the plan command."""

    def test_plan_text(self, descriptor_yml: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(descriptor_yml), "plan"])
        assert result.exit_code == 0
        assert "1. lib" in result.output
        assert "2. app" in result.output
        assert "Toolchain floor: 21" in result.output
        assert "lib:test (unit) [spock]" in result.output

    def test_plan_json(self, descriptor_yml: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["plan", str(descriptor_yml), "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["order"] == ["lib", "app"]
        assert data["toolchainFloor"] == "21"
        assert data["externalDependencies"] == [
            "com.google.inject:guice:7.0.0",
            "org.spockframework:spock-core:2.3-groovy-4.0",
        ]

    def test_plan_output_file(self, descriptor_yml: Path, tmp_path: Path):
        out = tmp_path / "build" / "plan.json"
        runner = CliRunner()
        result = runner.invoke(
            cli, ["--config", str(descriptor_yml), "plan", "--output", str(out)]
        )
        assert result.exit_code == 0
        assert "Plan saved" in result.output
        assert json.loads(out.read_text())["order"] == ["lib", "app"]

    def test_plan_multiple_files(self, tmp_path: Path):
        lib = _write(tmp_path, "name: lib\ntoolchainFloor: 17\n", "lib.yml")
        app = _write(tmp_path, "name: app\ndependencies: [':lib']\ntoolchainFloor: 11\n", "app.yml")
        runner = CliRunner()
        result = runner.invoke(cli, ["plan", str(app), str(lib), "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["order"] == ["lib", "app"]
        assert data["toolchainFloor"] == "17"

    def test_plan_cycle_fails(self, tmp_path: Path):
        config = _write(tmp_path, CYCLIC)
        runner = CliRunner()
        result = runner.invoke(cli, ["plan", str(config), "--json"])
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["violations"][0]["cycle"] == ["A", "B"]

    def test_plan_invalid_yaml(self, tmp_path: Path):
        config = _write(tmp_path, ":: invalid: yaml: [")
        runner = CliRunner()
        result = runner.invoke(cli, ["plan", str(config)])
        assert result.exit_code == 1
        assert "Invalid YAML" in result.output
