#!/usr/bin/env python3
"""
dart_dev Main Entry Point

Loads the project's dev config, sets up logging and hands argv to the
command dispatcher.
"""

import logging
import sys
from typing import List, Optional

from .cli_app import run
from .config import ConfigError, load_config
from .dev_tool import ExitCode
from .utils.log_setup import configure_logging

logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the ``ddev`` command."""
    configure_logging()

    try:
        config = load_config()
    except ConfigError as e:
        logger.error(str(e))
        return ExitCode.CONFIG

    return run(sys.argv[1:] if argv is None else argv, config)


if __name__ == "__main__":
    sys.exit(main())
