"""Tests for the subprocess-backed environment probe."""

import subprocess
from unittest.mock import patch

import pytest

from nodeman.core.probe import CommandError, EnvironmentProbe


def completed(stdout="", stderr="", returncode=0):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class TestEnvironmentProbe:
    """Tests for EnvironmentProbe.run() and run_shell()."""

    @patch("nodeman.core.probe.subprocess.run")
    def test_run_trims_output(self, mock_run):
        mock_run.return_value = completed(stdout="  v20.11.1\n")
        assert EnvironmentProbe().run(["node", "--version"]) == "v20.11.1"
        args, kwargs = mock_run.call_args
        assert args[0] == ["node", "--version"]
        assert kwargs["shell"] is False
        assert kwargs["capture_output"] is True
        assert kwargs["timeout"] is None

    @patch("nodeman.core.probe.subprocess.run")
    def test_run_shell_passes_string(self, mock_run):
        mock_run.return_value = completed(stdout="/usr/bin/node\n")
        assert EnvironmentProbe().run_shell("which node") == "/usr/bin/node"
        args, kwargs = mock_run.call_args
        assert args[0] == "which node"
        assert kwargs["shell"] is True

    @patch("nodeman.core.probe.subprocess.run")
    def test_nonzero_exit(self, mock_run):
        mock_run.return_value = completed(stderr="which: no node\n", returncode=1)
        with pytest.raises(CommandError) as exc_info:
            EnvironmentProbe().run_shell("which node")
        assert exc_info.value.returncode == 1
        assert exc_info.value.stderr == "which: no node"

    @patch("nodeman.core.probe.subprocess.run", side_effect=FileNotFoundError("node"))
    def test_missing_executable(self, mock_run):
        with pytest.raises(CommandError) as exc_info:
            EnvironmentProbe().run(["node", "--version"])
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)
        assert exc_info.value.returncode is None

    @patch("nodeman.core.probe.subprocess.run",
           side_effect=subprocess.TimeoutExpired(cmd=["node"], timeout=1))
    def test_timeout(self, mock_run):
        with pytest.raises(CommandError):
            EnvironmentProbe(timeout=1).run(["node", "--version"])
        assert mock_run.call_args[1]["timeout"] == 1

    @patch("nodeman.core.probe.subprocess.run",
           side_effect=UnicodeDecodeError("utf-8", b"v20\xff", 3, 4, "invalid start byte"))
    def test_undecodable_output(self, mock_run):
        with pytest.raises(CommandError) as exc_info:
            EnvironmentProbe().run(["node", "--version"])
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)
