from typing import Callable, List, Optional

import grpc
import pytest

from starlinkctl.core import ChannelOptions
from starlinkctl.protocol import DishState, Request, Response

EXPECTED_LINES = [
    "ID: abc123",
    "HW: rev2",
    "SW: 2024.01",
    "State: CONNECTED",
    "Uptime (s): 3600",
    "Ping latency (ms): 25.50",
    "Ping drop rate: 0.0012",
    "Downlink (bps): 150000000",
    "Uplink (bps): 12000000",
    "Obstructed now: false",
    "Fraction obstructed: 0.0003",
]


class FakeRpcError(grpc.RpcError):
    """RpcError carrying a status code, as raised by grpcio for failed calls."""

    def __init__(self, code: grpc.StatusCode, details: str = "") -> None:
        super().__init__(details)
        self._code = code
        self._details = details

    def code(self) -> grpc.StatusCode:
        return self._code

    def details(self) -> str:
        return self._details


class FakeConnection:
    """In-process stand-in for a gRPC device connection."""

    def __init__(
        self,
        response: Optional[Response] = None,
        *,
        error: Optional[BaseException] = None,
        close_error: Optional[BaseException] = None,
    ) -> None:
        self.response = response if response is not None else Response()
        self.error = error
        self.close_error = close_error
        self.requests: List[Request] = []
        self.timeouts: List[float] = []
        self.wait_flags: List[bool] = []
        self.close_call_count = 0

    def handle(
        self, request: Request, *, timeout: float, wait_for_ready: bool
    ) -> Response:
        self.requests.append(request)
        self.timeouts.append(timeout)
        self.wait_flags.append(wait_for_ready)
        if self.error is not None:
            raise self.error
        return self.response

    def close(self) -> None:
        self.close_call_count += 1
        if self.close_error is not None:
            raise self.close_error


class FakeConnectionFactory:
    def __init__(
        self,
        connection: Optional[FakeConnection] = None,
        *,
        error: Optional[BaseException] = None,
    ) -> None:
        self.connection = connection or FakeConnection()
        self.error = error
        self.calls: List[tuple[str, ChannelOptions]] = []

    def __call__(self, address: str, options: ChannelOptions) -> FakeConnection:
        self.calls.append((address, options))
        if self.error is not None:
            raise self.error
        return self.connection


class FailingSink:
    """Text sink that rejects the write with the given 1-based index."""

    def __init__(self, fail_on: int) -> None:
        self.fail_on = fail_on
        self.lines: List[str] = []

    def write(self, text: str) -> int:
        if len(self.lines) + 1 == self.fail_on:
            raise BrokenPipeError("broken pipe")
        self.lines.append(text)
        return len(text)


def build_status_response(*, obstruction: bool = True) -> Response:
    response = Response()
    status = response.dish_get_status
    status.SetInParent()
    status.device_info.id = "abc123"
    status.device_info.hardware_version = "rev2"
    status.device_info.software_version = "2024.01"
    status.state = DishState.Value("CONNECTED")
    status.device_state.uptime_s = 3600
    status.pop_ping_latency_ms = 25.5
    status.pop_ping_drop_rate = 0.0012
    status.downlink_throughput_bps = 1.5e8
    status.uplink_throughput_bps = 1.2e7
    if obstruction:
        status.obstruction_stats.SetInParent()
        status.obstruction_stats.currently_obstructed = False
        status.obstruction_stats.fraction_obstructed = 0.0003
    return response


@pytest.fixture
def status_response() -> Callable[..., Response]:
    return build_status_response


@pytest.fixture
def expected_lines() -> List[str]:
    return list(EXPECTED_LINES)


@pytest.fixture
def rpc_error() -> Callable[..., FakeRpcError]:
    return FakeRpcError


@pytest.fixture
def fake_factory() -> Callable[..., FakeConnectionFactory]:
    def _create(response: Optional[Response] = None, **kwargs) -> FakeConnectionFactory:
        factory_error = kwargs.pop("factory_error", None)
        connection = FakeConnection(response, **kwargs)
        return FakeConnectionFactory(connection, error=factory_error)

    return _create


@pytest.fixture
def failing_sink() -> Callable[[int], FailingSink]:
    return FailingSink
