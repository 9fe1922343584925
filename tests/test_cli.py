"""Tests for the dirlens CLI."""

import json

import pytest
from click.testing import CliRunner

from dirlens import __version__
from dirlens.cli import cli

pytestmark = pytest.mark.usefixtures("clean_logging")


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def project(make_project, component_source):
    return make_project({
        "package.json": json.dumps({"dependencies": {"redux": "^4.2.0"}}),
        "src/components/Button.tsx": component_source,
        "src/redux/store.ts": "import { createStore } from 'redux';\n",
        "src/utils/format.ts": "export const format = (x) => String(x);\n",
    })


def _records(output: str) -> dict:
    data = json.loads(output)
    return {r["path"]: r for r in data["records"]}


class TestAnalyzeCommand:
    """Tests for `dirlens analyze`."""

    def test_json_output(self, runner, project):
        result = runner.invoke(cli, ["analyze", str(project), "--json"])
        assert result.exit_code == 0, result.output
        records = _records(result.stdout)
        assert records["src/components"]["purpose"] == "components"
        assert records["src/redux"]["purpose"] == "Redux state management"

    def test_no_manifest(self, runner, project):
        result = runner.invoke(cli, ["analyze", str(project), "--json", "--no-manifest"])
        assert result.exit_code == 0, result.output
        assert _records(result.stdout)["src/redux"]["resolved_by"] != "dependency_stage"

    def test_extra_dependency(self, runner, make_project):
        root = make_project({"src/store/index.ts": ""})
        result = runner.invoke(cli, ["analyze", str(root), "--json", "--dep", "zustand"])
        assert result.exit_code == 0, result.output
        assert _records(result.stdout)["src/store"]["purpose"] == "Zustand state management"

    def test_locale(self, runner, project):
        result = runner.invoke(cli, ["analyze", str(project), "--json", "--locale", "zh"])
        assert result.exit_code == 0, result.output
        assert _records(result.stdout)["src/components"]["purpose"] == "组件"

    def test_tree_output(self, runner, project):
        result = runner.invoke(cli, ["analyze", str(project)])
        assert result.exit_code == 0, result.output
        assert "components" in result.output
        assert "Architecture" in result.output

    def test_missing_config_fails(self, runner, project, temp_dir):
        missing = str(temp_dir / "missing.toml")
        result = runner.invoke(cli, ["analyze", str(project), "--config", missing])
        assert result.exit_code == 1
        assert "Config file not found" in result.output

    def test_analysis_error_exits_nonzero(self, runner, project, mocker):
        mocker.patch("dirlens.cli.collect_files", side_effect=PermissionError("Permission denied"))
        result = runner.invoke(cli, ["analyze", str(project)])
        assert result.exit_code == 1
        assert "Permission" in result.output


class TestClassifyCommand:
    """Tests for `dirlens classify`."""

    def test_json(self, runner):
        result = runner.invoke(cli, ["classify", "src/hooks/useAuth.ts", "README.md", "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["src/hooks/useAuth.ts"]["category"] == "hook"
        assert data["README.md"]["confidence"] == "low"

    def test_table(self, runner):
        result = runner.invoke(cli, ["classify", "src/hooks/useAuth.ts"])
        assert result.exit_code == 0, result.output
        assert "hook" in result.output


def test_version(runner):
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output
