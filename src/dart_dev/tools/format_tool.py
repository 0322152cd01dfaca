"""
Format tool: runs the Dart formatter on the current project.

Register it in ``tool/dev.yaml``::

    format:
      type: format
      default_mode: assert_no_changes
      exclude:
        - lib/src/generated/**/*.dart
      formatter: dart_style

and run it with ``ddev format``. It can also be run from a script::

    FormatTool(formatter=Formatter.DART_FORMAT).execute()
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, List, NoReturn, Optional, Set

import typer

from ..command import COMMAND_CONTEXT_SETTINGS, run_tool_command
from ..dev_tool import (
    DevTool,
    DevToolExecutionContext,
    ExitCode,
    ExitEarly,
    RunProcess,
    TaskExecution,
)
from ..integrations.process import ProcessDeclaration, ProcessMode
from ..utils.args import assert_no_positional_args, ensure_verbose_flag, split_args
from ..utils.globs import Expander, expand_glob, expand_patterns
from ..utils.log_setup import log_subprocess_header
from ..utils.pubspec import package_is_immediate_dependency

_log = logging.getLogger(__name__)


class FormatMode(str, Enum):
    """Modes supported by the Dart formatter."""

    # -n --set-exit-if-changed
    ASSERT_NO_CHANGES = "assert_no_changes"
    # -n
    DRY_RUN = "dry_run"
    # -w
    OVERWRITE = "overwrite"


class Formatter(str, Enum):
    """Available Dart formatters."""

    # Provided by the Dart SDK.
    DARTFMT = "dartfmt"
    # Provided by the `dart_style` package.
    DART_STYLE = "dart_style"
    # The `dart format` command of newer SDKs.
    DART_FORMAT = "dart_format"


DEFAULT_INCLUDES = [
    "*.dart",
    "benchmark/**/*.dart",
    "bin/**/*.dart",
    "example/**/*.dart",
    "lib/**/*.dart",
    "test/**/*.dart",
    "tool/**/*.dart",
    "web/**/*.dart",
]

USAGE_FOOTER = 'Arguments can be passed to the formatter process via the --formatter-args option.'


@dataclass
class FormatTool(DevTool):
    """Runs the Dart formatter over the configured inputs.

    Every field can be overridden from the config file; ``default_mode`` is
    still overridable on the command line with ``-w``, ``-n`` or ``-a``.
    """

    default_mode: FormatMode = FormatMode.OVERWRITE
    description: Optional[str] = "Format dart files in this package."
    # Globs excluded from the formatter inputs. Nothing by default.
    exclude: Optional[List[str]] = None
    formatter: Formatter = Formatter.DARTFMT
    # Extra args for the formatter process; see `dartfmt -h -v`.
    formatter_args: Optional[List[str]] = None
    # Globs included as formatter inputs. The default passes `.` which makes
    # the formatter walk the whole project itself.
    include: Optional[List[str]] = None

    def run(self, context: Optional[DevToolExecutionContext] = None) -> TaskExecution:
        return build_execution(
            context or DevToolExecutionContext(),
            configured_formatter_args=self.formatter_args,
            default_mode=self.default_mode,
            exclude=self.exclude,
            formatter=self.formatter,
            include=self.include,
        )

    def to_command(self, name: str, app: typer.Typer) -> None:
        tool = self

        @app.command(name, help=self.description, context_settings=COMMAND_CONTEXT_SETTINGS)
        def format_command(
            ctx: typer.Context,
            overwrite: bool = typer.Option(
                False,
                "--overwrite",
                "-w",
                help="Overwrite input files with formatted output.",
                rich_help_panel="Formatter Mode",
            ),
            dry_run: bool = typer.Option(
                False,
                "--dry-run",
                "-n",
                help="Show which files would be modified but make no changes.",
                rich_help_panel="Formatter Mode",
            ),
            assert_no_changes: bool = typer.Option(
                False,
                "--assert",
                "-a",
                help="Assert that no changes need to be made by setting the exit "
                'code accordingly. Implies "--dry-run" and "--set-exit-if-changed".',
                rich_help_panel="Formatter Mode",
            ),
            formatter_args: Optional[str] = typer.Option(
                None,
                "--formatter-args",
                help='Args to pass to the formatter process. Run "dartfmt -h -v" '
                "to see all available options.",
                rich_help_panel="Other Options",
            ),
        ) -> int:
            return run_tool_command(
                tool,
                ctx,
                {
                    "overwrite": overwrite,
                    "dry_run": dry_run,
                    "assert": assert_no_changes,
                    "formatter_args": formatter_args,
                },
            )


def build_args(
    executable_args: Iterable[str],
    mode: Optional[FormatMode],
    *,
    configured_formatter_args: Optional[Iterable[str]] = None,
    formatter_args: Optional[str] = None,
    verbose: bool = False,
) -> List[str]:
    """Build the full list of args for the formatter process.

    The order is fixed:

    1. ``executable_args`` (e.g. ``run dart_style:format``)
    2. the flag(s) for ``mode``
    3. ``configured_formatter_args``, from :attr:`FormatTool.formatter_args`
    4. ``formatter_args``, the ``--formatter-args`` value split on whitespace
    5. ``-v`` if ``verbose`` and no verbose flag is present yet
    """
    args = list(executable_args)

    if mode is FormatMode.ASSERT_NO_CHANGES:
        args += ["-n", "--set-exit-if-changed"]
    elif mode is FormatMode.OVERWRITE:
        args.append("-w")
    elif mode is FormatMode.DRY_RUN:
        args.append("-n")

    if configured_formatter_args is not None:
        args += list(configured_formatter_args)
    args += split_args(formatter_args)

    if verbose:
        ensure_verbose_flag(args)
    return args


def build_execution(
    context: DevToolExecutionContext,
    *,
    configured_formatter_args: Optional[List[str]] = None,
    default_mode: Optional[FormatMode] = None,
    exclude: Optional[List[str]] = None,
    formatter: Optional[Formatter] = None,
    include: Optional[List[str]] = None,
    path: Optional[str] = None,
    expand: Expander = expand_glob,
    logger: Optional[logging.Logger] = None,
) -> TaskExecution:
    """Decide how the formatter should be run, without running it.

    ``context`` imitates the CLI input; the keyword args mirror the
    :class:`FormatTool` fields. ``path`` overrides the working directory for
    the pubspec lookup and input globs and is meant for tests.
    """
    log = logger or _log

    mode = None
    if context.args is not None:
        assert_no_positional_args(
            context.rest,
            context.usage_exception,
            command_name=context.command_name,
            usage_footer=USAGE_FOOTER,
        )
        mode = validate_and_parse_mode(context.args, context.usage_exception)
    if mode is None:
        mode = default_mode

    if formatter is Formatter.DART_STYLE and not package_is_immediate_dependency(
        "dart_style", path=path
    ):
        log.error(
            'Cannot run "dart_style:format".\n'
            'Either add "dart_style" to the dependencies in pubspec.yaml or '
            'configure the format tool to use "dartfmt" instead.'
        )
        return ExitEarly(ExitCode.CONFIG)

    inputs = build_inputs(exclude=exclude, include=include, root=path, expand=expand, logger=log)
    if not inputs:
        return ExitEarly(ExitCode.CONFIG)

    process = build_process(formatter)
    args = build_args(
        process.args,
        mode,
        configured_formatter_args=configured_formatter_args,
        formatter_args=context.arg("formatter_args"),
        verbose=context.verbose,
    )
    args += context.passthrough
    ordered_inputs = sorted(inputs)
    log_command(process.executable, ordered_inputs, args, verbose=context.verbose, logger=log)
    return RunProcess(
        ProcessDeclaration(
            process.executable,
            [*args, *ordered_inputs],
            mode=ProcessMode.INHERIT_STDIO,
        )
    )


def build_inputs(
    *,
    exclude: Optional[List[str]] = None,
    include: Optional[List[str]] = None,
    root: Optional[str] = None,
    expand: Expander = expand_glob,
    logger: Optional[logging.Logger] = None,
) -> Set[str]:
    """Return the paths the formatter should run on.

    The expanded ``exclude`` globs are removed from the expanded ``include``
    globs. Globs are relative to the working directory unless ``root`` is
    given.

    Without explicit includes, the default depends on the excludes: with no
    excludes the project root itself is the only input; with excludes, the
    known Dart source directories are expanded so that the excluded files can
    be removed from the result.
    """
    log = logger or _log
    if exclude is None:
        exclude = []
    if include is None:
        include = list(DEFAULT_INCLUDES) if exclude else []

    include_paths: Set[str] = set()
    if not include:
        include_paths.add(os.path.normpath(root or "."))
    include_paths |= expand_patterns(include, root, expand=expand, label="include", log=log)
    log.debug("Include paths:\n  %s", "\n  ".join(sorted(include_paths)))

    exclude_paths = expand_patterns(exclude, root, expand=expand, label="exclude", log=log)
    log.debug("Exclude paths:\n  %s", "\n  ".join(sorted(exclude_paths)))

    excluded = include_paths & exclude_paths
    if excluded:
        log.debug("Excluding these paths from formatting:\n  %s", "\n  ".join(sorted(excluded)))

    inputs = include_paths - exclude_paths
    if not inputs:
        log.error(
            "The formatter cannot run because no inputs could be found with "
            "the configured includes and excludes.\n"
            'Please modify the excludes and/or includes in "tool/dev.yaml".'
        )
    return inputs


def build_process(formatter: Optional[Formatter] = None) -> ProcessDeclaration:
    """Return the base process for ``formatter``.

    - ``DARTFMT`` -> ``dartfmt``
    - ``DART_STYLE`` -> ``pub run dart_style:format``
    - ``DART_FORMAT`` -> ``dart format``
    """
    if formatter is Formatter.DART_STYLE:
        return ProcessDeclaration("pub", ["run", "dart_style:format"])
    if formatter is Formatter.DART_FORMAT:
        return ProcessDeclaration("dart", ["format"])
    return ProcessDeclaration("dartfmt", [])


def log_command(
    executable: str,
    inputs: List[str],
    args: List[str],
    *,
    verbose: bool = False,
    logger: Optional[logging.Logger] = None,
) -> None:
    """Log the formatter command so it can be rerun by hand.

    More than five inputs are abbreviated unless ``verbose``.
    """
    exe_and_args = f"{executable} {' '.join(args)}".strip()
    if len(inputs) <= 5 or verbose:
        command = f"{exe_and_args} {' '.join(inputs)}"
    else:
        command = f"{exe_and_args} <{len(inputs)} paths>"
    log_subprocess_header(logger or _log, command)


def validate_and_parse_mode(
    args, usage_exception: Callable[[str], NoReturn]
) -> Optional[FormatMode]:
    """Parse a single :class:`FormatMode` from the ``--assert``, ``--dry-run``
    and ``--overwrite`` flags in ``args``.

    Calls ``usage_exception`` if more than one of them is set. Returns None if
    none are.
    """
    assert_no_changes = args.get("assert") is True
    dry_run = args.get("dry_run") is True
    overwrite = args.get("overwrite") is True

    if assert_no_changes and dry_run and overwrite:
        usage_exception("Cannot use --assert and --dry-run and --overwrite at the same time.")
    if assert_no_changes and dry_run:
        usage_exception("Cannot use --assert and --dry-run at the same time.")
    if assert_no_changes and overwrite:
        usage_exception("Cannot use --assert and --overwrite at the same time.")
    if dry_run and overwrite:
        usage_exception("Cannot use --dry-run and --overwrite at the same time.")

    if assert_no_changes:
        return FormatMode.ASSERT_NO_CHANGES
    if dry_run:
        return FormatMode.DRY_RUN
    if overwrite:
        return FormatMode.OVERWRITE
    return None
