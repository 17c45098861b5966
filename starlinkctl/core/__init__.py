"""Core primitives for starlinkctl."""

from .protocols import ChannelOptions, ConnectionFactory, DeviceConnection

__all__ = [
    "ChannelOptions",
    "ConnectionFactory",
    "DeviceConnection",
]
