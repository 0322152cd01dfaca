"""Analyze tool: runs the Dart static analyzer on the current project."""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

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

_log = logging.getLogger(__name__)


@dataclass
class AnalyzeTool(DevTool):
    """Runs ``dartanalyzer`` (or ``dart analyze``) over the configured inputs."""

    # Extra args for the analyzer process.
    analyzer_args: Optional[List[str]] = None
    description: Optional[str] = "Run static analysis on dart files in this package."
    include: List[str] = field(default_factory=lambda: ["."])
    use_dart_analyze: bool = False

    def run(self, context: Optional[DevToolExecutionContext] = None) -> TaskExecution:
        return build_execution(
            context or DevToolExecutionContext(),
            configured_analyzer_args=self.analyzer_args,
            include=self.include,
            use_dart_analyze=self.use_dart_analyze,
        )

    def to_command(self, name: str, app: typer.Typer) -> None:
        tool = self

        @app.command(name, help=self.description, context_settings=COMMAND_CONTEXT_SETTINGS)
        def analyze_command(
            ctx: typer.Context,
            analyzer_args: Optional[str] = typer.Option(
                None,
                "--analyzer-args",
                help="Args to pass to the analyzer process.",
            ),
        ) -> int:
            return run_tool_command(tool, ctx, {"analyzer_args": analyzer_args})


def build_execution(
    context: DevToolExecutionContext,
    *,
    configured_analyzer_args: Optional[List[str]] = None,
    include: Optional[List[str]] = None,
    use_dart_analyze: bool = False,
    path: Optional[str] = None,
    expand: Expander = expand_glob,
    logger: Optional[logging.Logger] = None,
) -> TaskExecution:
    log = logger or _log

    if context.args is not None:
        assert_no_positional_args(
            context.rest,
            context.usage_exception,
            command_name=context.command_name,
            usage_footer="Arguments can be passed to the analyzer process via the "
            "--analyzer-args option.",
        )

    inputs = sorted(expand_patterns(include or ["."], path, expand=expand, label="include", log=log))
    if not inputs:
        log.error(
            "The analyzer cannot run because no inputs could be found with the "
            'configured includes.\nPlease modify the includes in "tool/dev.yaml".'
        )
        return ExitEarly(ExitCode.CONFIG)

    if use_dart_analyze:
        executable, args = "dart", ["analyze"]
    else:
        executable, args = "dartanalyzer", []
    args += list(configured_analyzer_args or [])
    args += split_args(context.arg("analyzer_args"))
    if context.verbose and not use_dart_analyze:
        ensure_verbose_flag(args)
    args += context.passthrough

    log_subprocess_header(log, " ".join([executable, *args, *inputs]))
    return RunProcess(
        ProcessDeclaration(executable, [*args, *inputs], mode=ProcessMode.INHERIT_STDIO)
    )
