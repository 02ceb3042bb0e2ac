"""Health check plugin - exposes a liveness route."""

import logging
import time

from fastapi import Request
from fastapi.responses import JSONResponse

from superapp.plugins import EngineContext, Plugin, define_plugin

logger = logging.getLogger(__name__)

_started_at = time.monotonic()


async def health(request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok", "uptime_seconds": round(time.monotonic() - _started_at, 1)})


async def on_init(ctx: EngineContext) -> None:
    logger.info(f"Health check ready, {len(ctx.connections)} connection(s) registered")


plugin = define_plugin(
    Plugin(
        name="health",
        routes={"GET /health": health},
        on_init=on_init,
    )
)
