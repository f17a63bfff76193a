"""
Shared utilities for Librarium.

Provides access to common functionality used across Gate implementations.
"""

from librarium.shared.gate import (
    GateLogger,
    GateErrorHandler,
    build_health_status,
)

__all__ = [
    "GateLogger",
    "GateErrorHandler",
    "build_health_status",
]
