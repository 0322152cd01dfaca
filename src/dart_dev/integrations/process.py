"""Process declarations and the runner that executes them."""

from __future__ import annotations

import logging
import os
import shlex
import signal
import subprocess
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterator

logger = logging.getLogger(__name__)


class ProcessMode(str, Enum):
    """How the standard streams of a child process are wired."""

    INHERIT_STDIO = "inherit-stdio"
    CAPTURED = "captured"


@dataclass(frozen=True)
class ProcessDeclaration:
    """An inert description of an external command.

    Nothing is started when one of these is created; it is handed to a
    :class:`ProcessRunner` (or a stub in tests) which consumes it exactly once.
    """

    executable: str
    args: tuple[str, ...] = field(default_factory=tuple)
    mode: ProcessMode = ProcessMode.INHERIT_STDIO

    def __post_init__(self) -> None:
        # Accept any iterable for args but store an immutable tuple.
        object.__setattr__(self, "args", tuple(self.args))

    @property
    def argv(self) -> list[str]:
        return [self.executable, *self.args]

    def __str__(self) -> str:
        return " ".join(map(shlex.quote, self.argv))


@dataclass
class CommandResult:
    """Result of executing a command."""

    code: int
    stdout: str
    stderr: str
    duration_s: float
    argv: list[str]
    cwd: str | None = None
    env: dict[str, str] | None = None


class ToolError(RuntimeError):
    """Raised when a tool process cannot be started."""

    pass


def _default_sigint() -> None:
    signal.signal(signal.SIGINT, signal.SIG_DFL)


@contextmanager
def _sigint_ignored() -> Iterator[Callable[[], None] | None]:
    """Ignore SIGINT in this process while a child runs in the foreground.

    Yields the ``preexec_fn`` that gives the child default SIGINT handling
    back, or None where that is not needed or not possible.
    """
    previous = signal.getsignal(signal.SIGINT)
    if previous is None or threading.current_thread() is not threading.main_thread():
        yield None
        return

    signal.signal(signal.SIGINT, signal.SIG_IGN)
    try:
        if os.name == "posix" and previous is not signal.SIG_IGN:
            yield _default_sigint
        else:
            yield None
    finally:
        signal.signal(signal.SIGINT, previous)


class ProcessRunner:
    """Executes :class:`ProcessDeclaration` values synchronously."""

    def run(
        self,
        process: ProcessDeclaration,
        cwd: str | None = None,
        env: dict[str, str] | None = None,
    ) -> CommandResult:
        """Start ``process``, wait for it to exit and return its result.

        With ``ProcessMode.INHERIT_STDIO`` the child writes straight to this
        process' terminal and ``stdout``/``stderr`` of the result are empty.
        """
        cmd = process.argv
        capture = process.mode is ProcessMode.CAPTURED
        start = time.time()

        proc_env = None
        if env:
            proc_env = os.environ.copy()
            proc_env.update(env)

        logger.debug("Starting process: %s", process)
        try:
            if capture:
                completed = subprocess.run(
                    cmd,
                    cwd=cwd,
                    env=proc_env,
                    capture_output=True,
                    text=True,
                    shell=False,
                )
                code = completed.returncode
                stdout = completed.stdout or ""
                stderr = completed.stderr or ""
            else:
                # The child shares the terminal and receives Ctrl-C itself; its
                # exit status is reported as is.
                with _sigint_ignored() as reset_child_sigint:
                    child = subprocess.Popen(
                        cmd,
                        cwd=cwd,
                        env=proc_env,
                        shell=False,
                        preexec_fn=reset_child_sigint,
                    )
                    code = child.wait()
                stdout = stderr = ""
        except FileNotFoundError as exc:
            raise ToolError(f"Command not found: {cmd[0]}") from exc
        except PermissionError as exc:
            raise ToolError(f"Command is not executable: {cmd[0]}") from exc
        except OSError as exc:
            raise ToolError(f"Cannot start {cmd[0]}: {exc.strerror or exc}") from exc

        dur = time.time() - start
        logger.debug("Process exited with %s after %.2fs", code, dur)
        return CommandResult(
            code=code,
            stdout=stdout,
            stderr=stderr,
            duration_s=dur,
            argv=cmd,
            cwd=cwd,
            env=env,
        )
