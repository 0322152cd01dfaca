"""Glue between a typer sub-command and the DevTool it runs."""

from dataclasses import dataclass, field
from typing import Any, Mapping, NoReturn, Tuple

import typer

from .dev_tool import DevTool, DevToolExecutionContext, execute_task
from .errors import UsageError
from .integrations.process import ProcessRunner

# Stray positionals land in ctx.args; each tool reports them itself.
COMMAND_CONTEXT_SETTINGS = {"allow_extra_args": True}


@dataclass
class DispatchState:
    """Invocation-wide state stored on the root click context."""

    runner: ProcessRunner = field(default_factory=ProcessRunner)
    passthrough: Tuple[str, ...] = ()
    verbose: bool = False


def run_tool_command(tool: DevTool, ctx: typer.Context, args: Mapping[str, Any]) -> int:
    """Shared body of every generated sub-command callback."""
    state = ctx.find_object(DispatchState) or DispatchState()

    def usage_exception(message: str) -> NoReturn:
        raise UsageError(message, ctx=ctx)

    context = DevToolExecutionContext(
        args=args,
        rest=tuple(ctx.args),
        passthrough=state.passthrough,
        verbose=state.verbose,
        command_name=ctx.info_name,
        usage_exception=usage_exception,
    )
    return execute_task(tool.run(context), state.runner)
