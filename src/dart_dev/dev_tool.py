"""
The DevTool abstraction.

A DevTool is a configurable unit of work. Running it is split in two steps:

1. :meth:`DevTool.run` validates configuration and command-line input and
   returns a :data:`TaskExecution`: either an exit code to stop with, or a
   :class:`ProcessDeclaration` describing the one process to start.
2. :func:`execute_task` hands that declaration to a :class:`ProcessRunner`.

Step 1 never touches a process, so nearly all of a tool's behavior can be
tested by asserting on the value it returns.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Callable, Mapping, NoReturn, Optional, Union

import typer

from .errors import UsageError
from .integrations.process import ProcessDeclaration, ProcessRunner


class ExitCode(IntEnum):
    """Exit codes reserved by dart_dev (sysexits.h values where one fits)."""

    SUCCESS = 0
    USAGE = 64
    UNAVAILABLE = 69
    CONFIG = 78
    # 128 + SIGINT, for a Ctrl-C before any process was started.
    INTERRUPTED = 130


def _raise_usage_error(message: str) -> NoReturn:
    raise UsageError(message)


@dataclass(frozen=True)
class DevToolExecutionContext:
    """Per-invocation state handed to :meth:`DevTool.run`.

    ``args`` is None when a tool is run directly rather than from the command
    line. ``rest`` holds positional args parsed before ``--`` and
    ``passthrough`` everything after it.
    """

    args: Optional[Mapping[str, Any]] = None
    rest: tuple[str, ...] = ()
    passthrough: tuple[str, ...] = ()
    verbose: bool = False
    command_name: Optional[str] = None
    usage_exception: Callable[[str], NoReturn] = _raise_usage_error

    def __post_init__(self) -> None:
        object.__setattr__(self, "rest", tuple(self.rest))
        object.__setattr__(self, "passthrough", tuple(self.passthrough))

    def arg(self, name: str, default: Any = None) -> Any:
        if self.args is None:
            return default
        value = self.args.get(name)
        return default if value is None else value


@dataclass(frozen=True)
class ExitEarly:
    """The tool is done; exit with ``exit_code`` without starting a process."""

    exit_code: int


@dataclass(frozen=True)
class RunProcess:
    """The tool's result is the result of running ``process``."""

    process: ProcessDeclaration


TaskExecution = Union[ExitEarly, RunProcess]


class DevTool(ABC):
    """Base class for every task exposed as a ``ddev`` sub-command."""

    description: Optional[str] = None

    @abstractmethod
    def run(self, context: Optional[DevToolExecutionContext] = None) -> TaskExecution:
        """Validate input and decide what, if anything, should be run."""

    @abstractmethod
    def to_command(self, name: str, app: typer.Typer) -> None:
        """Register this tool on ``app`` as the sub-command ``name``."""

    def execute(
        self,
        context: Optional[DevToolExecutionContext] = None,
        runner: Optional[ProcessRunner] = None,
    ) -> int:
        """Run this tool to completion outside of the CLI."""
        return execute_task(self.run(context), runner)


def execute_task(execution: TaskExecution, runner: Optional[ProcessRunner] = None) -> int:
    """Turn a :data:`TaskExecution` into an exit code."""
    if isinstance(execution, ExitEarly):
        return execution.exit_code
    runner = runner or ProcessRunner()
    return runner.run(execution.process).code
