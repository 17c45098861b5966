"""Human-readable rendering of a dish status reply."""

from __future__ import annotations

import logging
from typing import List, TextIO

from .errors import MissingStatusError, WriteError
from .protocol import (
    DISH_STATUS_VARIANT,
    RESPONSE_ONEOF,
    DishGetStatusResponse,
    Response,
    dish_state_name,
)

LOGGER = logging.getLogger(__name__)


def _bool_text(value: bool) -> str:
    return "true" if value else "false"


def extract_status(response: Response) -> DishGetStatusResponse:
    """Return the dish status variant of ``response``.

    Raises:
        MissingStatusError: If the envelope carries any other variant, or none.
    """

    variant = response.WhichOneof(RESPONSE_ONEOF)
    if variant != DISH_STATUS_VARIANT:
        raise MissingStatusError(f"{DISH_STATUS_VARIANT} is missing (got {variant})")
    return getattr(response, DISH_STATUS_VARIANT)


def status_lines(status: DishGetStatusResponse) -> List[str]:
    """Render the summary lines for ``status`` in their fixed order.

    Absent nested groups read as zero values. The two obstruction lines are
    only emitted when the obstruction group is present.
    """

    info = status.device_info
    lines = [
        f"ID: {info.id}",
        f"HW: {info.hardware_version}",
        f"SW: {info.software_version}",
        f"State: {dish_state_name(status.state)}",
        f"Uptime (s): {status.device_state.uptime_s}",
        f"Ping latency (ms): {status.pop_ping_latency_ms:.2f}",
        f"Ping drop rate: {status.pop_ping_drop_rate:.4f}",
        f"Downlink (bps): {status.downlink_throughput_bps:.0f}",
        f"Uplink (bps): {status.uplink_throughput_bps:.0f}",
    ]

    if status.HasField("obstruction_stats"):
        obstruction = status.obstruction_stats
        lines.append(f"Obstructed now: {_bool_text(obstruction.currently_obstructed)}")
        lines.append(f"Fraction obstructed: {obstruction.fraction_obstructed:.4f}")

    return lines


def write_status(response: Response, sink: TextIO) -> None:
    """Write the status summary of ``response`` to ``sink``, one line per write.

    Each line is flushed before the next is written, so a buffered sink
    reports a rejected write here rather than when it is closed.

    Raises:
        MissingStatusError: Before anything is written, if the reply lacks the
            dish status variant.
        WriteError: On the first rejected write or flush; remaining lines are
            dropped.
    """

    lines = status_lines(extract_status(response))
    flush = getattr(sink, "flush", None)

    for number, line in enumerate(lines, start=1):
        try:
            sink.write(line + "\n")
            if flush is not None:
                flush()
        except (OSError, ValueError) as exc:
            LOGGER.debug("Write of line %d failed: %s", number, exc)
            raise WriteError(str(exc) or exc.__class__.__name__, line=number) from exc
