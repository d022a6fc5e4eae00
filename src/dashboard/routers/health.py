"""Health check router — /health endpoint for agents and load balancers."""

from __future__ import annotations

from fastapi import APIRouter, Request

from core.storage import load_settings

router = APIRouter(tags=["health"])


@router.get("/health")
def health(request: Request) -> dict:
    """Always 200.  ``catalog`` is ``loaded`` once the directory has been built."""
    loaded = getattr(request.app.state, "endpoints", None) is not None
    return {
        "status": "ok",
        "apiUrl": load_settings()["apiUrl"],
        "catalog": "loaded" if loaded else "pending",
    }
