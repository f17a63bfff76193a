"""
Health check API endpoint.

Aggregates health status from the configured gates.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Response


def create_router(gates: Dict[str, Any]) -> APIRouter:
    """
    Args:
        gates: Gate name -> object exposing get_health_status()
    """
    router = APIRouter()

    @router.get("/api/health")
    def api_health(response: Response):
        """Report health for every gate; 503 if any is unhealthy."""
        statuses = {name: gate.get_health_status() for name, gate in gates.items()}
        healthy = all(s.get("healthy", False) for s in statuses.values())
        if not healthy:
            response.status_code = 503
        return {"status": "healthy" if healthy else "degraded", "gates": statuses}

    return router


__all__ = ["create_router"]
