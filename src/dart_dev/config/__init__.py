"""Configuration management for dart_dev."""

from .loader import (
    CONFIG_ENV,
    TOOL_TYPES,
    ConfigError,
    build_tools,
    core_config,
    load_config,
)

__all__ = [
    "CONFIG_ENV",
    "ConfigError",
    "TOOL_TYPES",
    "build_tools",
    "core_config",
    "load_config",
]
