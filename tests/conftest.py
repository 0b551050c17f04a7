"""Shared fixtures: fake environment probe and install trees."""

import os
from typing import Dict, List, Union

import pytest

from nodeman.core.interfaces import IEnvironmentProbe
from nodeman.core.locator import BinaryLocator
from nodeman.core.probe import CommandError

Response = Union[str, Exception]


class FakeProbe(IEnvironmentProbe):
    """Probe answering from canned responses; unknown commands fail like a missing binary."""

    def __init__(self, commands: Dict[tuple, Response] = None, shell: Dict[str, Response] = None):
        self.commands = dict(commands or {})
        self.shell = dict(shell or {})
        self.calls: List[Union[tuple, str]] = []

    def _answer(self, key, table):
        self.calls.append(key)
        if key not in table:
            raise CommandError(key, f"command not found: {key}")
        response = table[key]
        if isinstance(response, Exception):
            raise response
        return response.strip()

    def run(self, cmd):
        return self._answer(tuple(cmd), self.commands)

    def run_shell(self, command):
        return self._answer(command, self.shell)


def healthy_probe(node_version: str = "v20.0.0", npm_version: str = "10.2.4") -> FakeProbe:
    return FakeProbe(
        commands={
            ("node", "--version"): node_version + "\n",
            ("npm", "--version"): npm_version + "\n",
        },
        shell={
            "which node": "/usr/local/bin/node\n/usr/bin/node\n",
            "which npm": "/usr/local/bin/npm\n",
        },
    )


@pytest.fixture
def probe():
    return healthy_probe()


@pytest.fixture
def broken_probe():
    return FakeProbe()


@pytest.fixture
def posix_locator(probe):
    return BinaryLocator(probe, platform="linux")


@pytest.fixture
def install_dir(tmp_path):
    """Install root holding v18.0.0, v20.0.0, a stray dir and a stray file."""
    root = tmp_path / "node"
    for name in ("v18.0.0", "v20.0.0", "not-a-version", "vnext"):
        (root / name).mkdir(parents=True)
    (root / "v22.0.0.tar.gz").write_text("archive")
    return root


def make_node_binary(version_dir, windows: bool = False, script: str = "echo v20.0.0",
                     executable: bool = True) -> str:
    if windows:
        path = os.path.join(str(version_dir), "node.exe")
    else:
        os.makedirs(os.path.join(str(version_dir), "bin"), exist_ok=True)
        path = os.path.join(str(version_dir), "bin", "node")
    with open(path, "w") as f:
        f.write(f"#!/bin/sh\n{script}\n")
    os.chmod(path, 0o755 if executable else 0o644)
    return path
