"""gRPC connection factory for dish management endpoints.

Channels are created lazily by grpcio: building one does not dial the
endpoint. Readiness is only enforced when a call is made, under the call's
own deadline.
"""

from __future__ import annotations

import logging
from typing import Optional

import grpc

from . import constants
from .core import ChannelOptions
from .errors import ConnectionSetupError
from .protocol import Request, Response

LOGGER = logging.getLogger(__name__)


_TARGET_SCHEMES = ("dns:", "unix:", "unix-abstract:", "ipv4:", "ipv6:", "vsock:")


def _validate_address(address: str) -> None:
    """Reject targets grpcio could never dial.

    Name-resolver targets such as ``unix:/run/dish.sock`` or ``dns:///dish``
    are passed through untouched, as is a bare host (grpcio supplies the
    default port). A ``host:port`` target must carry a host and a valid port.
    """

    if not address or address != address.strip():
        raise ConnectionSetupError(f"invalid address {address!r}: empty or padded")
    if address.startswith(_TARGET_SCHEMES):
        return

    if address.startswith("["):
        host, _, rest = address[1:].partition("]")
        if not host or (rest and not rest.startswith(":")):
            raise ConnectionSetupError(f"invalid address {address!r}: bad host")
        sep, port = rest[:1], rest[1:]
    elif address.count(":") > 1:
        # Unbracketed IPv6 literal.
        return
    else:
        host, sep, port = address.partition(":")
        if not host:
            raise ConnectionSetupError(f"invalid address {address!r}: missing host")

    if sep and not (port.isdigit() and 0 < int(port) < 65536):
        raise ConnectionSetupError(f"invalid address {address!r}: bad port {port!r}")


class GrpcDeviceConnection:
    """Device connection backed by a ``grpc.Channel``."""

    def __init__(self, channel: grpc.Channel, address: str) -> None:
        self._channel: Optional[grpc.Channel] = channel
        self._address = address
        self._handle = channel.unary_unary(
            constants.HANDLE_METHOD,
            request_serializer=Request.SerializeToString,
            response_deserializer=Response.FromString,
        )

    @property
    def address(self) -> str:
        return self._address

    @property
    def closed(self) -> bool:
        return self._channel is None

    def handle(
        self, request: Request, *, timeout: float, wait_for_ready: bool
    ) -> Response:
        if self._channel is None:
            raise ValueError("Connection is closed")
        return self._handle(request, timeout=timeout, wait_for_ready=wait_for_ready)

    def close(self) -> None:
        if self._channel is None:
            return
        channel, self._channel = self._channel, None
        LOGGER.debug("Closing channel to %s", self._address)
        channel.close()


class GrpcConnectionFactory:
    """Creates plaintext or TLS channels to a dish endpoint."""

    def __init__(self, *, root_certificates: Optional[bytes] = None) -> None:
        self._root_certificates = root_certificates

    def __call__(self, address: str, options: ChannelOptions) -> GrpcDeviceConnection:
        _validate_address(address)

        try:
            if options.use_tls:
                credentials = grpc.ssl_channel_credentials(
                    root_certificates=self._root_certificates
                )
                channel = grpc.secure_channel(address, credentials)
            else:
                channel = grpc.insecure_channel(address)
        except Exception as exc:
            raise ConnectionSetupError(str(exc) or exc.__class__.__name__) from exc

        LOGGER.debug(
            "Created %s channel to %s",
            "TLS" if options.use_tls else "plaintext",
            address,
        )
        return GrpcDeviceConnection(channel, address)
