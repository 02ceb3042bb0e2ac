"""Request log plugin - times every request and logs unhandled errors."""

import logging
import time
from typing import Any, Dict

from fastapi import Response

from superapp.plugins import Plugin, PipelineContext, PipelineNext, define_plugin

logger = logging.getLogger("plugin.request-log")


def create_plugin(config: Dict[str, Any]) -> Plugin:
    """Build the descriptor from plugin settings."""
    slow_request_ms = float(config.get("slow_request_ms", 1000))

    async def timing(ctx: PipelineContext, call_next: PipelineNext) -> Response:
        start = time.perf_counter()
        response = await call_next()
        elapsed_ms = (time.perf_counter() - start) * 1000
        level = logging.WARNING if elapsed_ms >= slow_request_ms else logging.DEBUG
        logger.log(level, f"{ctx.request.method} {ctx.request.url.path} -> {response.status_code} ({elapsed_ms:.0f}ms)")
        return response

    def on_error(error: Exception, ctx: PipelineContext) -> None:
        logger.error(f"Unhandled error on {ctx.request.method} {ctx.request.url.path}: {error}")

    return define_plugin(
        Plugin(
            name="request-log",
            middleware=[timing],
            on_error=on_error,
        )
    )
