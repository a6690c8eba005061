"""Reliva API application: middleware, routers, lifecycle hooks and health."""

import ipaddress
import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from reliva.api.router import api_router
from reliva.core.config import settings
from reliva.core.errors import register_exception_handlers
from reliva.db.session import dispose_engines, init_models
from reliva.sources.observability import source_monitor, summarize

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger("reliva")

app = FastAPI(title=settings.app_name)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_exception_handlers(app)
app.include_router(api_router, prefix=settings.api_prefix)


@app.on_event("startup")
async def _startup() -> None:
    await init_models()
    logger.info("%s started (%s)", settings.app_name, settings.environment)


@app.on_event("shutdown")
async def _shutdown() -> None:
    await dispose_engines()


def _request_origins(request: Request) -> list[str]:
    """Client address and Host header name, in that order."""
    origins = []
    if request.client and request.client.host:
        origins.append(request.client.host)
    host = request.headers.get("host", "")
    if host:
        origins.append(host.rsplit(":", 1)[0] if host.count(":") == 1 else host)
    return origins


def _matches(origin: str, entry: str) -> bool:
    try:
        return ipaddress.ip_address(origin) in ipaddress.ip_network(entry, strict=False)
    except ValueError:
        return origin.casefold() == entry.casefold()


def _telemetry_allowed(request: Request) -> bool:
    return any(
        _matches(origin, entry)
        for origin in _request_origins(request)
        for entry in settings.health_allowlist
        if entry
    )


@app.get("/health", tags=["internal"])
@app.get(f"{settings.api_prefix}/health", tags=["internal"])
async def health(request: Request) -> dict[str, Any]:
    """Liveness for everyone; allowlisted callers also get source call telemetry."""
    if not _telemetry_allowed(request):
        return {"status": "ok"}
    telemetry = summarize(await source_monitor.snapshot())
    return {"status": "degraded" if telemetry["issues"] else "ok", "sources": telemetry}
