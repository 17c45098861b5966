"""Status query command for Starlink dish management endpoints."""

__version__ = "0.1.0"
