"""Command-line interface for starlinkctl."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from . import constants
from .app import execute
from .config import parse_args
from .errors import ArgumentError, HelpRequested, StarlinkCtlError
from .logging import configure_logging

LOGGER = logging.getLogger(__name__)


def main(argv: Optional[list[str]] = None) -> int:
    args = sys.argv[1:] if argv is None else argv

    try:
        config = parse_args(args)
    except HelpRequested:
        return 0
    except ArgumentError as exc:
        configure_logging(constants.DEFAULT_LOG_LEVEL)
        LOGGER.error("%s", exc)
        return 2

    configure_logging(config.log_level, log_network=config.log_level == "DEBUG")

    try:
        execute(config, sys.stdout)
    except StarlinkCtlError as exc:
        LOGGER.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
