"""
Shared test configuration for dart_dev.

Provides:
- A stub process runner that records declarations instead of spawning them
- Temporary Dart project trees
- Isolation of the package logger between tests
"""

import logging
from pathlib import Path
from typing import List, Optional

import pytest

from dart_dev.dev_tool import DevToolExecutionContext
from dart_dev.integrations.process import CommandResult, ProcessDeclaration, ToolError


class UsageErrorRaised(Exception):
    """Raised by the test usage_exception so the message can be asserted."""


def raise_usage(message: str):
    raise UsageErrorRaised(message)


def cli_context(**kwargs) -> DevToolExecutionContext:
    """A context that looks like it came from the command line."""
    kwargs.setdefault("args", {})
    kwargs.setdefault("command_name", "format")
    kwargs.setdefault("usage_exception", raise_usage)
    return DevToolExecutionContext(**kwargs)


class StubRunner:
    """Records every declaration it is asked to run and returns ``code``."""

    def __init__(self, code: int = 0, error: Optional[BaseException] = None) -> None:
        self.code = code
        self.error = error
        self.calls: List[ProcessDeclaration] = []

    def run(self, process: ProcessDeclaration, cwd=None, env=None) -> CommandResult:
        self.calls.append(process)
        if self.error is not None:
            raise self.error
        return CommandResult(
            code=self.code, stdout="", stderr="", duration_s=0.0, argv=process.argv
        )


def fake_expander(matches: dict):
    """An expander that maps patterns to canned paths, never touching disk."""

    def expand(pattern: str, root: Optional[str] = None):
        value = matches.get(pattern, [])
        if isinstance(value, Exception):
            raise value
        return list(value)

    return expand


@pytest.fixture
def stub_runner():
    return StubRunner()


@pytest.fixture
def failing_runner():
    return StubRunner(error=ToolError("Command not found: dartfmt"))


def _write(root: Path, relative: str, content: str = "") -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def dart_project(tmp_path):
    """A small Dart package with three source files and one non-Dart file."""
    _write(tmp_path, "pubspec.yaml", "name: sample\ndev_dependencies:\n  test: any\n")
    _write(tmp_path, "bin/main.dart", "void main() {}\n")
    _write(tmp_path, "lib/a.dart", "int a = 1;\n")
    _write(tmp_path, "lib/src/b.dart", "int b = 2;\n")
    _write(tmp_path, "README.md", "# sample\n")
    return tmp_path


@pytest.fixture
def write_file():
    return _write


@pytest.fixture(autouse=True)
def _isolate_package_logger():
    """configure_logging() mutates the package logger; restore it afterwards."""
    package_logger = logging.getLogger("dart_dev")
    saved = (list(package_logger.handlers), package_logger.propagate, package_logger.level)
    yield
    package_logger.handlers = saved[0]
    package_logger.propagate = saved[1]
    package_logger.setLevel(saved[2])
