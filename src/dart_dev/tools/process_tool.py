"""Process tool: runs a fixed command, e.g. ``dart run build_runner build``."""

from typing import Iterable, Optional

import typer

from ..command import COMMAND_CONTEXT_SETTINGS, run_tool_command
from ..dev_tool import (
    DevTool,
    DevToolExecutionContext,
    RunProcess,
    TaskExecution,
)
from ..integrations.process import ProcessDeclaration, ProcessMode
from ..utils.args import assert_no_positional_args


class ProcessTool(DevTool):
    """Runs ``executable`` with ``args``; anything after ``--`` is appended."""

    def __init__(
        self,
        executable: str,
        args: Iterable[str] = (),
        description: Optional[str] = None,
    ) -> None:
        self.executable = executable
        self.args = list(args)
        self.description = description or f"Run `{' '.join([executable, *self.args])}`."

    def __repr__(self) -> str:
        return f"ProcessTool(executable={self.executable!r}, args={self.args!r})"

    def run(self, context: Optional[DevToolExecutionContext] = None) -> TaskExecution:
        context = context or DevToolExecutionContext()
        if context.args is not None:
            assert_no_positional_args(
                context.rest,
                context.usage_exception,
                command_name=context.command_name,
                usage_footer="Arguments can be passed to the process after a `--` separator.",
            )
        return RunProcess(
            ProcessDeclaration(
                self.executable,
                [*self.args, *context.passthrough],
                mode=ProcessMode.INHERIT_STDIO,
            )
        )

    def to_command(self, name: str, app: typer.Typer) -> None:
        tool = self

        @app.command(name, help=self.description, context_settings=COMMAND_CONTEXT_SETTINGS)
        def process_command(ctx: typer.Context) -> int:
            return run_tool_command(tool, ctx, {})
