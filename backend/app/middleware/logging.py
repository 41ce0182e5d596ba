"""Access log for the admin API."""

import json
import logging
import time
from typing import Callable

from app.core.logging import ACCESS_LOGGER

logger = logging.getLogger(ACCESS_LOGGER)


class StructuredLoggingMiddleware:
    """
    Write one JSON line per request.

    admin_id is the admin that get_current_admin resolved for the request, or
    null for public and rejected calls. Query strings and headers are never
    logged since they can carry bearer tokens.
    """

    def __init__(self, app: Callable) -> None:
        self.app = app

    async def __call__(self, scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start = time.perf_counter()
        # Shared with request.state inside the endpoint
        state = scope.setdefault("state", {})

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                client = scope.get("client")
                logger.info(json.dumps({
                    "method": scope["method"],
                    "path": scope["path"],
                    "status_code": message["status"],
                    "admin_id": state.get("admin_id"),
                    "client_ip": client[0] if client else None,
                    "duration_ms": round((time.perf_counter() - start) * 1000, 2),
                }))
            await send(message)

        await self.app(scope, receive, send_wrapper)
