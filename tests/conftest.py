"""
Shared fixtures for smart-shell tests.
"""

import pytest

from smart_shell.config import ConfigPaths
from smart_shell.executor import ExecutionResult
from smart_shell.proxy import CommandProxy
from smart_shell.tables import TranslationTable


@pytest.fixture
def table():
    """A small translation table covering the documented examples."""
    return TranslationTable.from_dict({
        "base": {
            "ls": {"windows": "dir", "linux": "ls", "darwin": "ls"},
            "cat": {"windows": "type", "linux": "cat", "darwin": "cat"},
            "rm -rf": {"windows": "rmdir /s /q", "linux": "rm -rf", "darwin": "rm -rf"},
        }
    })


class FakeRunner:
    """Records command lines and returns a canned result."""

    def __init__(self, result=None):
        self.result = result or ExecutionResult(stdout="", stderr="", exit_code=0)
        self.calls = []

    def __call__(self, command, cwd=None):
        self.calls.append((command, cwd))
        return self.result


@pytest.fixture
def project_dir(tmp_path):
    """Working directory for commands and flavor detection."""
    d = tmp_path / "project"
    d.mkdir()
    return d


@pytest.fixture
def config_dir(tmp_path):
    d = tmp_path / "config"
    d.mkdir()
    return d


@pytest.fixture
def make_proxy(project_dir, config_dir):
    """Build a CommandProxy over temp directories."""
    def _make(os_name="windows", runner=None, strict_config=False):
        paths = ConfigPaths(cwd=project_dir, config_dir=config_dir)
        return CommandProxy(paths, os_name, strict_config=strict_config,
                            runner=runner or FakeRunner())
    return _make
