"""
Shared Gate utilities for Librarium.

- GateLogger: one namespaced logger per gate under "librarium"
- GateErrorHandler.wrap: log-and-default decorator for operations that must not raise
- build_health_status: health payload shared by every gate
"""

from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Callable, Dict, List, Optional

ROOT_LOGGER = "librarium"


class GateLogger:
    """Loggers named librarium.<gate>, sharing one handler on the root."""

    _loggers: Dict[str, logging.Logger] = {}
    _configured = False

    @classmethod
    def _ensure_configured(cls):
        if cls._configured:
            return
        root = logging.getLogger(ROOT_LOGGER)
        # Leave handlers installed by the host application alone
        if not root.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter("[%(name)s] %(levelname)s: %(message)s"))
            root.addHandler(handler)
            root.setLevel(logging.INFO)
        cls._configured = True

    @classmethod
    def get(cls, gate_name: str) -> logging.Logger:
        """Logger for a gate, e.g. GateLogger.get("FileAccessGate")."""
        cls._ensure_configured()
        name = f"{ROOT_LOGGER}.{gate_name}"
        if name not in cls._loggers:
            cls._loggers[name] = logging.getLogger(name)
        return cls._loggers[name]

    @classmethod
    def set_level(cls, level: int | str):
        """Set the level for every gate logger (accepts names like "DEBUG")."""
        cls._ensure_configured()
        logging.getLogger(ROOT_LOGGER).setLevel(level)


class GateErrorHandler:
    """Error handling for gate operations that report failure by return value."""

    @staticmethod
    def wrap(
        gate_name: str,
        operation: str,
        default_return: Any = None,
        log_level: int = logging.ERROR,
        reraise: bool = False,
    ):
        """
        Decorate a gate method so exceptions are logged and turned into a default.

        Args:
            gate_name: Gate whose logger receives the failure
            operation: Operation name for the log line
            default_return: Value returned when the call raises
            log_level: Level of the failure log line
            reraise: Re-raise after logging instead of returning the default
        """
        def decorator(func: Callable) -> Callable:
            @wraps(func)
            def wrapper(*args, **kwargs):
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    GateLogger.get(gate_name).log(log_level, f"{operation} failed: {e}")
                    if reraise:
                        raise
                    return default_return
            return wrapper
        return decorator


def build_health_status(
    gate_name: str,
    initialized: bool,
    dependencies: List[str],
    checks: Dict[str, bool],
    details: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Build a standardized health status dict.

    Args:
        gate_name: Name of the gate
        initialized: Whether the gate is initialized
        dependencies: List of dependency names
        checks: Dict of check name -> passed
        details: Additional details

    Returns:
        Standardized health status dict
    """
    all_checks_passed = all(checks.values()) if checks else True

    return {
        "gate": gate_name,
        "healthy": initialized and all_checks_passed,
        "initialized": initialized,
        "dependencies": dependencies,
        "checks": checks,
        "details": details or {},
    }
