"""
Command dispatcher: turns argv into a sub-command invocation.

Everything after the first literal ``--`` is kept away from the parser and
handed to the selected tool untouched.
"""

import logging
from typing import List, Mapping, Optional, Sequence, Tuple

import typer

from .command import DispatchState
from .dev_tool import DevTool, ExitCode
from .errors import Abort, ClickException, UsageError
from .integrations.process import ProcessRunner, ToolError
from .utils.log_setup import set_verbose

logger = logging.getLogger(__name__)

VERBOSE_ENV = "DART_DEV_VERBOSE"
SEPARATOR = "--"


def build_app(config: Mapping[str, DevTool]) -> typer.Typer:
    """Create the ``ddev`` app with one sub-command per configured tool."""
    app = typer.Typer(
        name="ddev",
        help="Centralized, configurable development tasks for Dart projects.",
        rich_markup_mode="rich",
        add_completion=False,
    )

    @app.callback()
    def main_callback(
        ctx: typer.Context,
        verbose: bool = typer.Option(
            False,
            "--verbose",
            "-v",
            envvar=VERBOSE_ENV,
            help="Enable verbose logging and pass verbose flags to tool processes.",
        ),
    ) -> None:
        state = ctx.ensure_object(DispatchState)
        state.verbose = verbose
        set_verbose(verbose)

    for name, tool in config.items():
        tool.to_command(name, app)
    return app


def split_passthrough(argv: Sequence[str]) -> Tuple[List[str], Tuple[str, ...]]:
    """Split ``argv`` at the first ``--`` into (parsed, passed-through) args."""
    argv = list(argv)
    if SEPARATOR not in argv:
        return argv, ()
    index = argv.index(SEPARATOR)
    return argv[:index], tuple(argv[index + 1 :])


def run(
    argv: Sequence[str],
    config: Mapping[str, DevTool],
    *,
    runner: Optional[ProcessRunner] = None,
) -> int:
    """Dispatch ``argv`` to the matching tool in ``config`` and return the exit code.

    The exit code is the tool's early exit code, the exit status of the process
    it declared, or one of the reserved :class:`ExitCode` values for usage
    errors and unavailable executables.
    """
    args, passthrough = split_passthrough(argv)
    state = DispatchState(runner=runner or ProcessRunner(), passthrough=passthrough)
    app = build_app(config)

    try:
        result = app(args=args, prog_name="ddev", standalone_mode=False, obj=state)
    except UsageError as e:
        e.show()
        return ExitCode.USAGE
    except ClickException as e:
        e.show()
        return e.exit_code
    except Abort:
        logger.error("Aborted.")
        return ExitCode.INTERRUPTED
    except ToolError as e:
        logger.error(str(e))
        return ExitCode.UNAVAILABLE

    return int(result or 0)
