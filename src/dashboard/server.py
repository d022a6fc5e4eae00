"""
dashboard/server.py — FastAPI application factory.

Startup modes:
  nodeswitch serve                         → standalone
  python -m dashboard.server               → same
  uvicorn dashboard.server:app --reload    → dev mode with auto-reload

The picker state is built from the catalog on the first request (or handed
to :func:`create_app` directly) and kept on ``app.state.endpoints``.
"""

from __future__ import annotations

import logging
import os

import uvicorn
from fastapi import FastAPI
from fastapi.responses import JSONResponse
from starlette.requests import Request

from core.config import DASHBOARD_PORT, REPO_ROOT
from core.logger import LOGGER
from core.state import EndpointsState
from dashboard.routers.endpoints import router as endpoints_router
from dashboard.routers.health import router as health_router
from endpoints.exceptions import CatalogError, InvalidEndpointError, SwitchBlockedError

log = LOGGER.getChild("dashboard")

# ── Logging ────────────────────────────────────────────────────────────────────

_NOISY_PATHS = ("/health", "/selection")


class _QuietAccessFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        msg = record.getMessage()
        if any(p in msg for p in _NOISY_PATHS):
            record.levelno = logging.DEBUG
            record.levelname = "DEBUG"
        return True


logging.getLogger("uvicorn.access").addFilter(_QuietAccessFilter())


# ── Error mapping ──────────────────────────────────────────────────────────────


async def _switch_blocked(request: Request, exc: SwitchBlockedError) -> JSONResponse:  # noqa: ARG001
    return JSONResponse(
        {"error": "SwitchBlocked", "detail": str(exc), "selection": exc.selection.to_dict()},
        status_code=409,
    )


async def _invalid_endpoint(request: Request, exc: InvalidEndpointError) -> JSONResponse:  # noqa: ARG001
    return JSONResponse({"error": "InvalidEndpoint", "detail": str(exc)}, status_code=422)


async def _catalog_error(request: Request, exc: CatalogError) -> JSONResponse:  # noqa: ARG001
    log.error("catalog unavailable: %s", exc)
    return JSONResponse({"error": "CatalogUnavailable", "detail": str(exc)}, status_code=502)


# ── Application factory ────────────────────────────────────────────────────────


def create_app(state: EndpointsState | None = None) -> FastAPI:
    """Build and return the configured FastAPI application."""
    application = FastAPI(title="nodeswitch", docs_url="/docs", redoc_url=None)
    if state is not None:
        application.state.endpoints = state

    application.add_exception_handler(SwitchBlockedError, _switch_blocked)
    application.add_exception_handler(InvalidEndpointError, _invalid_endpoint)
    application.add_exception_handler(CatalogError, _catalog_error)

    application.include_router(health_router)
    application.include_router(endpoints_router)
    return application


app = create_app()


# ── Startup helpers ────────────────────────────────────────────────────────────


def _load_env() -> None:
    env_file = REPO_ROOT / ".env"
    if env_file.exists():
        for line in env_file.read_text().splitlines():
            line = line.strip()
            if line and not line.startswith("#") and "=" in line:
                k, _, v = line.partition("=")
                os.environ.setdefault(k.strip(), v.strip())


# ── Entry point ────────────────────────────────────────────────────────────────


def main(host: str = "127.0.0.1", port: int | None = None) -> None:
    _load_env()
    port = port or DASHBOARD_PORT
    print(f"[dashboard] API → http://{host}:{port}/docs", flush=True)
    uvicorn.run(app, host=host, port=port, log_level="warning")


if __name__ == "__main__":
    main()
