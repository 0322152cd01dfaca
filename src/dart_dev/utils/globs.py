"""Best-effort glob expansion relative to a project root."""

from __future__ import annotations

import glob
import logging
import os
from typing import Callable, Iterable, Optional

logger = logging.getLogger(__name__)

Expander = Callable[[str, Optional[str]], Iterable[str]]


def expand_glob(pattern: str, root: Optional[str] = None) -> list[str]:
    """Expand ``pattern`` to the existing files and directories it matches.

    ``**`` matches any number of directories. When ``root`` is given the
    pattern is matched below it and the returned paths are joined to it, so
    they stay usable from the current working directory.
    """
    matches = glob.glob(pattern, root_dir=root, recursive=True)
    paths = [os.path.normpath(os.path.join(root, m) if root is not None else m) for m in matches]
    return [p for p in paths if os.path.isfile(p) or os.path.isdir(p)]


def expand_patterns(
    patterns: Iterable[str],
    root: Optional[str] = None,
    *,
    expand: Expander = expand_glob,
    label: str = "input",
    log: Optional[logging.Logger] = None,
) -> set[str]:
    """Union of the expansions of ``patterns``.

    A pattern whose expansion raises ``OSError`` contributes nothing; the error
    is logged at DEBUG and the remaining patterns are still expanded.
    """
    log = log or logger
    paths: set[str] = set()
    for pattern in patterns:
        try:
            paths.update(expand(pattern, root))
        except OSError as error:
            log.debug("Could not list %s glob: %s", label, pattern, exc_info=error)
    return paths
