"""Logging setup."""

from fleet_access.shared.telemetry.logging import setup_logging

__all__ = ["setup_logging"]
