"""
Logging setup for dart_dev.

Human output goes through rich; ``DART_DEV_LOG_FORMAT=json`` switches to one
JSON object per line for CI log collectors.
"""

import json
import logging
import os
import sys
import time
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT_ENV = "DART_DEV_LOG_FORMAT"
PACKAGE_LOGGER = "dart_dev"


class JsonFormatter(logging.Formatter):
    """Custom formatter that outputs logs as structured JSON."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": int(time.time() * 1000),
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "funcName": record.funcName,
            "lineno": record.lineno,
        }

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        for attr in ["command"]:
            if hasattr(record, attr):
                payload[attr] = getattr(record, attr)

        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(verbose: bool = False, fmt: Optional[str] = None) -> logging.Logger:
    """Install a single handler on the package logger and return it."""

    fmt = (fmt or os.environ.get(LOG_FORMAT_ENV) or "rich").lower()

    if fmt == "json":
        handler: logging.Handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(JsonFormatter())
    else:
        handler = RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.handlers = [handler]
    logger.propagate = False
    set_verbose(verbose)
    return logger


def set_verbose(verbose: bool) -> None:
    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.INFO)


def log_subprocess_header(logger: logging.Logger, command: str, level: int = logging.INFO) -> None:
    """Log the command about to be run, framed so it stands out from its output."""

    rule = "-" * min(max(len(command), 20), 80)
    logger.log(level, "%s\n%s\n%s", rule, command, rule, extra={"command": command})
