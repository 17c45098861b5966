"""Request lifecycle for a single status query."""

from __future__ import annotations

import logging
import sys
from typing import Optional, Sequence, TextIO

from .config import CtlConfig, parse_args
from .connection import GrpcConnectionFactory
from .core import ChannelOptions, ConnectionFactory, DeviceConnection
from .errors import CloseError, ConnectionSetupError
from .formatter import write_status
from .invoker import fetch_status

LOGGER = logging.getLogger(__name__)


def _close(connection: DeviceConnection, diagnostics: TextIO) -> None:
    try:
        connection.close()
    except Exception as exc:
        error = CloseError(str(exc) or exc.__class__.__name__)
        try:
            diagnostics.write(f"{error}\n")
        except (OSError, ValueError):
            LOGGER.debug("Could not report %s", error, exc_info=True)


def execute(
    config: CtlConfig,
    out: TextIO,
    connection_factory: Optional[ConnectionFactory] = None,
    *,
    diagnostics: Optional[TextIO] = None,
) -> None:
    """Connect, query and print the dish status described by ``config``.

    The connection, once created, is closed exactly once on every exit path.
    A failure while closing is reported to ``diagnostics`` (stderr by default)
    and never replaces the outcome of the query.
    """

    factory = connection_factory or GrpcConnectionFactory()
    diagnostics = diagnostics if diagnostics is not None else sys.stderr

    try:
        connection = factory(config.address, ChannelOptions(use_tls=config.use_tls))
    except ConnectionSetupError:
        raise
    except Exception as exc:
        raise ConnectionSetupError(str(exc) or exc.__class__.__name__) from exc
    LOGGER.debug("Connected to %s", config.address)

    try:
        response = fetch_status(connection, config.timeout, config.wait_ready)
        LOGGER.debug("Status reply received")

        write_status(response, out)
        LOGGER.debug("Status summary written")
    finally:
        _close(connection, diagnostics)


def run(
    args: Sequence[str],
    out: TextIO,
    connection_factory: Optional[ConnectionFactory] = None,
    *,
    diagnostics: Optional[TextIO] = None,
) -> None:
    """Resolve ``args`` and run one status query, writing the summary to ``out``.

    Raises:
        StarlinkCtlError: The first failure of any stage. ``stage`` on the
            exception names the step that failed.
    """

    config = parse_args(args)
    LOGGER.debug("Resolved configuration: %s", config)
    execute(config, out, connection_factory, diagnostics=diagnostics)
