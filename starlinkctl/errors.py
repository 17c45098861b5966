"""Error hierarchy for starlinkctl.

Every failure surfaced by :func:`starlinkctl.app.run` is a
:class:`StarlinkCtlError`. The ``stage`` attribute names the step of the
request lifecycle that failed so the entry point can report it.
"""

from __future__ import annotations

from typing import Optional


class StarlinkCtlError(RuntimeError):
    """Base error for starlinkctl."""

    stage: Optional[str] = None

    def __str__(self) -> str:
        message = super().__str__()
        if self.stage:
            return f"{self.stage}: {message}"
        return message


class ArgumentError(StarlinkCtlError):
    """Malformed or unknown command-line input."""

    stage = "parse args"


class HelpRequested(ArgumentError):
    """Usage was requested and has already been printed."""


class ConnectionSetupError(StarlinkCtlError):
    """The connection object could not be created."""

    stage = "create client"


class InvokeError(StarlinkCtlError):
    """The status RPC did not complete successfully."""

    stage = "handle(get_status)"

    def __init__(self, message: str, *, code: Optional[str] = None) -> None:
        super().__init__(message)
        self.code = code

    @property
    def timed_out(self) -> bool:
        return self.code == "DEADLINE_EXCEEDED"

    @property
    def unavailable(self) -> bool:
        return self.code == "UNAVAILABLE"


class MissingStatusError(StarlinkCtlError):
    """The reply did not carry the dish status variant."""

    stage = "unexpected response"


class WriteError(StarlinkCtlError):
    """The output sink rejected a write."""

    stage = "write"

    def __init__(self, message: str, *, line: int) -> None:
        super().__init__(message)
        self.line = line


class CloseError(StarlinkCtlError):
    """Releasing the connection failed."""

    stage = "close"
