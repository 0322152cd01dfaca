"""
dart_dev: Centralized Development Tasks for Dart Projects

A pluggable command-line orchestrator that wraps project maintenance tasks
(formatting, static analysis, arbitrary project commands) behind one command
surface. Every task first produces a declarative description of the process it
wants to run, and only then is that process executed, so the decision logic can
be tested without spawning anything.
"""

from .dev_tool import (
    DevTool,
    DevToolExecutionContext,
    ExitCode,
    ExitEarly,
    RunProcess,
    TaskExecution,
)
from .integrations.process import ProcessDeclaration, ProcessMode, ProcessRunner
from .tools import AnalyzeTool, FormatMode, Formatter, FormatTool, ProcessTool

__version__ = "1.0.0"
__author__ = "dart_dev Team"
__description__ = "Centralized, configurable development tasks for Dart projects"

__all__ = [
    "AnalyzeTool",
    "DevTool",
    "DevToolExecutionContext",
    "ExitCode",
    "ExitEarly",
    "FormatMode",
    "FormatTool",
    "Formatter",
    "ProcessDeclaration",
    "ProcessMode",
    "ProcessRunner",
    "ProcessTool",
    "RunProcess",
    "TaskExecution",
]
