"""Integration layer between dev tools and the external processes they run."""

from .process import (
    CommandResult,
    ProcessDeclaration,
    ProcessMode,
    ProcessRunner,
    ToolError,
)

__all__ = [
    "CommandResult",
    "ProcessDeclaration",
    "ProcessMode",
    "ProcessRunner",
    "ToolError",
]
