from __future__ import annotations

from librarium.Config import Settings
from librarium.shared.gate import GateLogger

# Lifecycle logger
_log = GateLogger.get("Lifecycle")


def prepare(settings: Settings):
    """Create directories the services expect before serving requests."""
    if not settings.prompts_directory.exists():
        settings.prompts_directory.mkdir(parents=True, exist_ok=True)
        _log.info(f"Created prompt library at {settings.prompts_directory}")


async def startup(settings: Settings):
    """Log the effective configuration once the server is up."""
    _log.info(f"Browsing {settings.base_directory}")
    _log.info(f"Prompt library at {settings.prompts_directory}")
    if settings.static_base_url:
        _log.info(f"Downloads served from {settings.static_base_url}")


async def shutdown():
    """Log server shutdown."""
    _log.info("Shutting down")
