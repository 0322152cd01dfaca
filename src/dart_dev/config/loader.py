"""Loading the name -> DevTool mapping from ``tool/dev.yaml``."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import yaml

from ..dev_tool import DevTool
from ..tools import AnalyzeTool, FormatMode, Formatter, FormatTool, ProcessTool

logger = logging.getLogger(__name__)

CONFIG_ENV = "DART_DEV_CONFIG"
DEFAULT_CONFIG_PATH = Path("tool") / "dev.yaml"


class ConfigError(ValueError):
    """Raised when the dev config file cannot be turned into tools."""


def _string_list(name: str, key: str, value: Any) -> Optional[list[str]]:
    if value is None:
        return None
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return list(value)
    raise ConfigError(f'"{name}.{key}" must be a string or a list of strings')


def _enum_value(name: str, key: str, enum_type, value: Any):
    try:
        return enum_type(value)
    except ValueError:
        choices = ", ".join(e.value for e in enum_type)
        raise ConfigError(f'"{name}.{key}" must be one of: {choices} (got {value!r})') from None


def _check_keys(name: str, entry: Dict[str, Any], allowed: set[str]) -> None:
    unknown = sorted(set(entry) - allowed - {"type"})
    if unknown:
        raise ConfigError(f'Unknown option(s) for "{name}": {", ".join(unknown)}')


def _build_format(name: str, entry: Dict[str, Any]) -> FormatTool:
    _check_keys(
        name,
        entry,
        {"default_mode", "description", "exclude", "formatter", "formatter_args", "include"},
    )
    tool = FormatTool()
    if "default_mode" in entry:
        tool.default_mode = _enum_value(name, "default_mode", FormatMode, entry["default_mode"])
    if "formatter" in entry:
        tool.formatter = _enum_value(name, "formatter", Formatter, entry["formatter"])
    if "description" in entry:
        tool.description = str(entry["description"])
    tool.exclude = _string_list(name, "exclude", entry.get("exclude"))
    tool.include = _string_list(name, "include", entry.get("include"))
    tool.formatter_args = _string_list(name, "formatter_args", entry.get("formatter_args"))
    return tool


def _build_analyze(name: str, entry: Dict[str, Any]) -> AnalyzeTool:
    _check_keys(name, entry, {"analyzer_args", "description", "include", "use_dart_analyze"})
    tool = AnalyzeTool()
    tool.analyzer_args = _string_list(name, "analyzer_args", entry.get("analyzer_args"))
    include = _string_list(name, "include", entry.get("include"))
    if include is not None:
        tool.include = include
    if "description" in entry:
        tool.description = str(entry["description"])
    tool.use_dart_analyze = bool(entry.get("use_dart_analyze", False))
    return tool


def _build_process(name: str, entry: Dict[str, Any]) -> ProcessTool:
    _check_keys(name, entry, {"args", "description", "executable"})
    executable = entry.get("executable")
    if not isinstance(executable, str) or not executable:
        raise ConfigError(f'"{name}.executable" is required for process tools')
    return ProcessTool(
        executable,
        _string_list(name, "args", entry.get("args")) or [],
        description=entry.get("description"),
    )


# Closed set of tool types that may appear under `type:` in the config file.
TOOL_TYPES: Dict[str, Callable[[str, Dict[str, Any]], DevTool]] = {
    "analyze": _build_analyze,
    "format": _build_format,
    "process": _build_process,
}


def core_config() -> Dict[str, DevTool]:
    """Tools available in every project, before the config file is applied."""
    return {
        "analyze": AnalyzeTool(),
        "format": FormatTool(),
    }


def build_tools(data: Any, base: Optional[Dict[str, DevTool]] = None) -> Dict[str, DevTool]:
    """Merge the parsed config ``data`` over ``base`` (the core config by default).

    A ``null`` entry removes a tool from the result.
    """
    tools = dict(core_config() if base is None else base)
    if data is None:
        return tools
    if not isinstance(data, dict):
        raise ConfigError("The dev config must be a mapping of task name to tool options")

    for name, entry in data.items():
        name = str(name)
        if entry is None:
            tools.pop(name, None)
            continue
        if not isinstance(entry, dict):
            raise ConfigError(f'"{name}" must be a mapping of tool options')
        tool_type = entry.get("type", name)
        builder = TOOL_TYPES.get(tool_type)
        if builder is None:
            raise ConfigError(
                f'Unknown tool type "{tool_type}" for "{name}" '
                f"(expected one of: {', '.join(sorted(TOOL_TYPES))})"
            )
        tools[name] = builder(name, entry)
    return tools


def resolve_config_path(path: Optional[str] = None) -> Path:
    return Path(path or os.environ.get(CONFIG_ENV) or DEFAULT_CONFIG_PATH)


def load_config(path: Optional[str] = None) -> Dict[str, DevTool]:
    """Load the tool mapping from ``path``, ``$DART_DEV_CONFIG`` or ``tool/dev.yaml``.

    A missing file yields the core config.

    Raises:
        ConfigError: If the file is not valid YAML or describes invalid tools
    """
    config_file = resolve_config_path(path)

    if not config_file.exists():
        logger.debug(f"No dev config found at {config_file}; using the core config")
        return core_config()

    try:
        with open(config_file, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_file}: {e}") from e

    tools = build_tools(data)
    logger.debug(f"Loaded {len(tools)} tools from {config_file}")
    return tools
