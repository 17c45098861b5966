"""Status RPC invocation."""

from __future__ import annotations

import logging
import time
from typing import Optional

import grpc

from .core import DeviceConnection
from .errors import InvokeError
from .protocol import Response, get_status_request

LOGGER = logging.getLogger(__name__)


def _status_code_name(exc: grpc.RpcError) -> Optional[str]:
    code = getattr(exc, "code", None)
    if not callable(code):
        return None
    value = code()
    return getattr(value, "name", None)


def _details(exc: grpc.RpcError) -> str:
    details = getattr(exc, "details", None)
    if callable(details):
        text = details()
        if text:
            return text
    return str(exc) or exc.__class__.__name__


def fetch_status(
    connection: DeviceConnection, timeout: float, wait_ready: bool
) -> Response:
    """Send one ``get_status`` request and return the reply envelope.

    A single absolute deadline is derived from ``timeout``. The remaining
    budget is handed to the transport, which spends it first waiting for the
    connection to become ready (when ``wait_ready`` is set) and then on the
    call itself. Without ``wait_ready`` an unready connection fails at once.

    Raises:
        InvokeError: On any transport or server failure, including the
            deadline elapsing. Nothing is retried.
    """

    if timeout <= 0:
        raise InvokeError(f"timeout must be positive, got {timeout!r}")

    request = get_status_request()
    started = time.monotonic()
    deadline = started + timeout
    remaining = max(deadline - time.monotonic(), 0.0)

    LOGGER.debug(
        "Calling Handle(get_status) with %.3fs budget (wait_for_ready=%s)",
        remaining,
        wait_ready,
    )

    try:
        response = connection.handle(
            request, timeout=remaining, wait_for_ready=wait_ready
        )
    except grpc.RpcError as exc:
        code = _status_code_name(exc)
        LOGGER.debug(
            "Handle(get_status) failed after %.3fs: %s",
            time.monotonic() - started,
            code or exc,
        )
        message = _details(exc)
        if code:
            message = f"{code}: {message}"
        raise InvokeError(message, code=code) from exc

    LOGGER.debug("Handle(get_status) completed in %.3fs", time.monotonic() - started)
    return response
