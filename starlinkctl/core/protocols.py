"""Protocol definitions for the device connection boundary.

The orchestrator only talks to the network through these contracts, so tests
can substitute an in-process fake for the gRPC channel.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..protocol import Request, Response


@dataclass(slots=True, frozen=True)
class ChannelOptions:
    """Transport options applied when a connection is created.

    Attributes:
        use_tls: Negotiate transport encryption. When false the channel is
                 plaintext, which is what dish management endpoints expect.
    """

    use_tls: bool = False


@runtime_checkable
class DeviceConnection(Protocol):
    """Logical connection to a device service endpoint."""

    def handle(
        self, request: Request, *, timeout: float, wait_for_ready: bool
    ) -> Response:
        """Perform one unary ``Handle`` call.

        Args:
            request: Request envelope to send.
            timeout: Seconds remaining before the call must be abandoned. The
                     budget covers waiting for readiness and the call itself.
            wait_for_ready: Queue the call while the connection is not ready
                            instead of failing immediately.

        Raises:
            grpc.RpcError: On transport or server failure.
        """
        ...

    def close(self) -> None:
        """Release the underlying channel."""
        ...


class ConnectionFactory(Protocol):
    """Creates a connection for an address, or raises ConnectionSetupError."""

    def __call__(self, address: str, options: ChannelOptions) -> DeviceConnection:
        ...
