"""Command-line configuration resolver for starlinkctl."""

from __future__ import annotations

import argparse
import re
from dataclasses import dataclass
from typing import NoReturn, Optional, Sequence

from . import constants
from .errors import ArgumentError, HelpRequested

_TRUE_VALUES = frozenset({"1", "t", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "f", "false", "no", "off"})

_UNIT_SECONDS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

_DURATION_TERM = re.compile(r"(\d+\.?\d*|\.\d+)(ns|us|µs|μs|ms|s|m|h)")

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(slots=True, frozen=True)
class CtlConfig:
    address: str = constants.DEFAULT_ADDRESS
    timeout: float = constants.DEFAULT_TIMEOUT_SECONDS
    wait_ready: bool = True
    use_tls: bool = False
    log_level: str = constants.DEFAULT_LOG_LEVEL


def parse_duration(value: str) -> float:
    """Parse a duration such as ``3s``, ``500ms`` or ``1m30s`` into seconds.

    The grammar is a sequence of decimal numbers each followed by a unit
    (``ns``, ``us``, ``ms``, ``s``, ``m``, ``h``) with an optional leading
    sign. A bare ``0`` is accepted.
    """

    text = value.strip()
    sign = 1.0
    if text[:1] in ("+", "-"):
        sign = -1.0 if text[0] == "-" else 1.0
        text = text[1:]

    if text == "0":
        return 0.0
    if not text:
        raise ValueError(f"invalid duration {value!r}")

    total = 0.0
    position = 0
    while position < len(text):
        match = _DURATION_TERM.match(text, position)
        if match is None:
            raise ValueError(f"invalid duration {value!r}")
        number, unit = match.groups()
        total += float(number) * _UNIT_SECONDS[unit]
        position = match.end()

    return sign * total


def parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"invalid boolean value {value!r}")


def _duration_arg(value: str) -> float:
    try:
        seconds = parse_duration(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc
    if seconds <= 0:
        raise argparse.ArgumentTypeError(f"duration must be positive, got {value!r}")
    return seconds


def _bool_arg(value: str) -> bool:
    try:
        return parse_bool(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _log_level_arg(value: str) -> str:
    level = value.strip().upper()
    if level not in _LOG_LEVELS:
        raise argparse.ArgumentTypeError(
            f"unknown log level {value!r} (choose from {', '.join(_LOG_LEVELS)})"
        )
    return level


class _ArgumentParser(argparse.ArgumentParser):
    """Parser that reports problems as exceptions instead of exiting."""

    def error(self, message: str) -> NoReturn:
        raise ArgumentError(message)

    def exit(self, status: int = 0, message: Optional[str] = None) -> NoReturn:
        if status:
            raise ArgumentError(message or "argument parsing failed")
        raise HelpRequested("help requested")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog=constants.APP_NAME,
        description="Query a Starlink dish for its status and print a summary",
        allow_abbrev=False,
    )
    parser.add_argument(
        "--addr",
        dest="address",
        default=constants.DEFAULT_ADDRESS,
        metavar="HOST:PORT",
        help=f"Dish gRPC address (default: {constants.DEFAULT_ADDRESS})",
    )
    parser.add_argument(
        "--timeout",
        type=_duration_arg,
        default=constants.DEFAULT_TIMEOUT_SECONDS,
        metavar="DURATION",
        help="RPC timeout, e.g. 3s or 500ms (default: 3s)",
    )
    parser.add_argument(
        "--wait-ready",
        dest="wait_ready",
        type=_bool_arg,
        nargs="?",
        const=True,
        default=True,
        metavar="BOOL",
        help="Wait for the channel to become ready (within the timeout) "
        "before failing (default: true)",
    )
    parser.add_argument(
        "--tls",
        dest="use_tls",
        type=_bool_arg,
        nargs="?",
        const=True,
        default=False,
        metavar="BOOL",
        help="Use transport encryption instead of plaintext (default: false)",
    )
    parser.add_argument(
        "--log-level",
        type=_log_level_arg,
        default=constants.DEFAULT_LOG_LEVEL,
        metavar="LEVEL",
        help=f"Diagnostic log level (default: {constants.DEFAULT_LOG_LEVEL})",
    )
    return parser


def parse_args(args: Sequence[str]) -> CtlConfig:
    """Resolve command-line tokens (without the program name) into a config.

    Raises:
        ArgumentError: On unknown flags, stray positionals or malformed values.
        HelpRequested: After usage has been printed for ``-h``/``--help``.
    """

    namespace = build_parser().parse_args(list(args))
    return CtlConfig(
        address=namespace.address,
        timeout=namespace.timeout,
        wait_ready=namespace.wait_ready,
        use_tls=namespace.use_tls,
        log_level=namespace.log_level,
    )
