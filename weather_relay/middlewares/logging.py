# weather_relay/middlewares/logging.py
"""访问日志中间件 - 每个请求记录一行请求、一行响应（状态码 + 耗时）

纯 ASGI 实现，不用 BaseHTTPMiddleware。
"""
from __future__ import annotations

import json
import logging
import time
from urllib.parse import parse_qsl

from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger("api.access")


class LoggingMiddleware:

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start_time = time.perf_counter()
        method = scope.get("method", "")
        path = scope.get("path", "")
        query_params = dict(parse_qsl(scope.get("query_string", b"").decode("latin-1")))

        req_log = f">>> {method} {path}"
        if query_params:
            req_log += f" | Query: {json.dumps(query_params, ensure_ascii=False)}"
        logger.info(req_log)

        response_status = 0

        async def send_wrapper(message: Message) -> None:
            nonlocal response_status
            if message["type"] == "http.response.start":
                response_status = message.get("status", 0)
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            duration = time.perf_counter() - start_time
            logger.info(
                f"<<< {method} {path} | Status: {response_status} | Time: {duration:.3f}s"
            )
