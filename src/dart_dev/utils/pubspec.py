"""Reading the dependency sections of a project's pubspec.yaml."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

DEPENDENCY_SECTIONS = ("dependencies", "dev_dependencies")


def load_pubspec(path: Optional[str] = None) -> Dict[str, Any]:
    """Load ``pubspec.yaml`` from the directory ``path`` (default: cwd).

    A missing or unparsable pubspec yields an empty mapping.
    """
    pubspec = Path(path or ".") / "pubspec.yaml"
    if not pubspec.exists():
        logger.debug("No pubspec.yaml found at %s", pubspec)
        return {}

    try:
        with open(pubspec, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.warning(f"Could not parse {pubspec}: {e}")
        return {}

    return data if isinstance(data, dict) else {}


def package_is_immediate_dependency(package_name: str, path: Optional[str] = None) -> bool:
    """Whether ``package_name`` is a direct (dev) dependency of the project."""
    pubspec = load_pubspec(path)
    for section in DEPENDENCY_SECTIONS:
        deps = pubspec.get(section) or {}
        if isinstance(deps, dict) and package_name in deps:
            return True
    return False
