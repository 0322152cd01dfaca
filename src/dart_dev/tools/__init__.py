"""Built-in dev tools."""

from .analyze_tool import AnalyzeTool
from .format_tool import FormatMode, Formatter, FormatTool
from .process_tool import ProcessTool

__all__ = ["AnalyzeTool", "FormatMode", "FormatTool", "Formatter", "ProcessTool"]
