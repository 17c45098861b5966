"""Constants used across the starlinkctl package."""

from __future__ import annotations

APP_NAME = "starlinkctl"

DEFAULT_DISH_HOST = "192.168.100.1"
DEFAULT_DISH_PORT = 9200
DEFAULT_ADDRESS = f"{DEFAULT_DISH_HOST}:{DEFAULT_DISH_PORT}"

DEFAULT_TIMEOUT_SECONDS = 3.0
DEFAULT_LOG_LEVEL = "WARNING"

DEVICE_SERVICE = "SpaceX.API.Device.Device"
HANDLE_METHOD = f"/{DEVICE_SERVICE}/Handle"
