"""Logging setup and structured audit events."""
from .logger import audit_enabled, audit_event
from .stdlib_logging import (
    configure_logging_from_config,
    configure_stdlib_logging,
    reset_stdlib_logging_for_tests,
)

__all__ = [
    "audit_enabled",
    "audit_event",
    "configure_logging_from_config",
    "configure_stdlib_logging",
    "reset_stdlib_logging_for_tests",
]
