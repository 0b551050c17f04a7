"""Tests for the command line interface."""

import json

import pytest

from conftest import FakeProbe, healthy_probe
from nodeman.cli import create_parser, run_cli
from nodeman.core.locator import BinaryLocator
from nodeman.core.node_manager import NodeManager
from nodeman.main import main


def run(argv, install_dir, probe=None):
    probe = probe or healthy_probe()
    args = create_parser().parse_args(argv)
    manager = NodeManager({"install_dir": str(install_dir)}, probe=probe,
                          locator=BinaryLocator(probe, platform="linux"))
    return run_cli(args, manager)


class TestCommands:
    """Tests for individual sub-commands."""

    def test_list_simple(self, install_dir, capsys):
        assert run(["list"], install_dir) == 0
        out = capsys.readouterr().out
        assert out.index("v20.0.0") < out.index("v18.0.0")
        assert " * v20.0.0" in out
        assert "not-a-version" not in out

    def test_list_json(self, install_dir, capsys):
        assert run(["list", "--format", "json"], install_dir) == 0
        data = json.loads(capsys.readouterr().out)
        assert [v["version"] for v in data["versions"]] == ["v20.0.0", "v18.0.0"]
        assert all(v["default"] is False for v in data["versions"])

    def test_list_grouped(self, install_dir, capsys):
        assert run(["list", "--group"], install_dir) == 0
        out = capsys.readouterr().out
        assert "Node 20.x:" in out and "Node 18.x:" in out

    def test_list_empty(self, tmp_path, capsys):
        assert run(["list"], tmp_path / "missing") == 0
        assert "未找到" in capsys.readouterr().out

    def test_env_json(self, tmp_path, capsys):
        assert run(["env", "-f", "json"], tmp_path) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["node_version"] == "v20.0.0"
        assert data["npm_path"] == "/usr/local/bin/npm"

    def test_env_failure(self, tmp_path, capsys):
        assert run(["env"], tmp_path, probe=FakeProbe()) == 1

    def test_parse(self, tmp_path, capsys):
        assert run(["parse", "20.11.1"], tmp_path) == 0
        assert json.loads(capsys.readouterr().out)["version"] == "v20.11.1"
        assert run(["parse", "not-a-version"], tmp_path) == 1

    def test_compare(self, tmp_path, capsys):
        assert run(["compare", "v18.0.0", "v20.0.0"], tmp_path) == 0
        assert capsys.readouterr().out.strip() == "-1"

    def test_compare_malformed(self, tmp_path, capsys):
        assert run(["compare", "nope", "v20.0.0"], tmp_path) == 2

    def test_satisfies(self, tmp_path, capsys):
        assert run(["satisfies", "v20.1.0", ">=18"], tmp_path) == 0
        assert run(["satisfies", "v16.0.0", ">=18"], tmp_path) == 1
        assert capsys.readouterr().out.split() == ["true", "false"]

    def test_installed(self, install_dir):
        assert run(["installed", "v20.0.0"], install_dir) == 0
        assert run(["installed", "v16.0.0"], install_dir) == 1

    def test_path(self, tmp_path, capsys):
        assert run(["path", "v20.0.0"], tmp_path) == 0
        assert capsys.readouterr().out.strip().endswith("v20.0.0")

    def test_validate_missing_binary(self, install_dir):
        assert run(["validate", str(install_dir / "v20.0.0")], install_dir) == 1

    def test_recommended(self, tmp_path, capsys):
        assert run(["recommended"], tmp_path) == 0
        assert capsys.readouterr().out.strip() == "20"


class TestMain:
    """Tests for argument handling in main()."""

    def test_no_command(self, capsys):
        assert main([]) == 1

    def test_bad_config_file(self, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text("{", encoding="utf-8")
        assert main(["--config", str(bad), "recommended"]) == 2

    def test_install_dir_flag(self, tmp_path, capsys):
        assert main(["--install-dir", str(tmp_path), "path", "v20.0.0"]) == 0
        assert capsys.readouterr().out.strip() == str(tmp_path / "v20.0.0")

    def test_version_flag(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
