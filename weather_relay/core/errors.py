from __future__ import annotations

import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class WeatherRelayError(Exception):
    """对外可见的业务错误：status_code + 给调用方看的 message"""

    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidRequest(WeatherRelayError):
    status_code = 400
    message = "Missing required query parameter: city"


class CityNotFound(WeatherRelayError):
    status_code = 404
    message = "City not found. Try another name."


class UpstreamFailure(WeatherRelayError):
    # 具体原因只写日志，不返回给调用方
    status_code = 500
    message = "Failed to fetch weather. Try again later."


class StartupConfigurationError(Exception):
    """启动配置缺失/非法，进程直接退出"""

    def __init__(self, message: str, fields: list[str] | None = None) -> None:
        super().__init__(message)
        self.fields = fields or []


def error_body(message: str) -> dict:
    return {"error": message}


async def relay_error_handler(request: Request, exc: WeatherRelayError):
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info("request validation failed on %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content=error_body("Invalid request parameters"))
