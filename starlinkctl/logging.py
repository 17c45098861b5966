"""Logging configuration helpers."""

from __future__ import annotations

import logging
import sys


def configure_logging(level: str = "WARNING", *, log_network: bool = False) -> None:
    """Configure root logging handlers.

    Parameters
    ----------
    level:
        Log level name, e.g. "INFO".
    log_network:
        When true, leave the gRPC transport loggers at the root level to aid
        connection diagnostics.
    """

    logging.captureWarnings(True)

    for handler in list(logging.getLogger().handlers):
        logging.getLogger().removeHandler(handler)

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stderr,
    )

    if not log_network:
        logging.getLogger("grpc").setLevel(logging.WARNING)
