# weather_relay/main.py
from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path

import httpx
import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from weather_relay import __version__
from weather_relay.api.health import router as health_router
from weather_relay.api.weather import router as weather_router
from weather_relay.core.config import Settings, load_settings
from weather_relay.core.errors import (
    StartupConfigurationError,
    WeatherRelayError,
    http_exception_handler,
    relay_error_handler,
    validation_exception_handler,
)
from weather_relay.core.log_setup import setup_logging
from weather_relay.middlewares.logging import LoggingMiddleware
from weather_relay.middlewares.request_id import request_id_middleware

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """
    组装应用。settings 由进程入口构造后传进来；
    transport 仅用于测试注入（httpx.MockTransport）。
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # 应用启动：创建全局 httpx.AsyncClient
        http_client = httpx.AsyncClient(
            timeout=settings.openweather_timeout,
            transport=transport,
        )
        app.state.http_client = http_client
        yield
        # 应用关闭：释放 http client
        await http_client.aclose()

    app = FastAPI(title="Weather Relay", version=__version__, lifespan=lifespan)
    app.state.settings = settings

    # middleware
    app.middleware("http")(request_id_middleware)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # exception handlers
    app.add_exception_handler(WeatherRelayError, relay_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # routers
    app.include_router(weather_router)
    app.include_router(health_router)

    # 前端页面挂在最后，避免盖住 API 路由
    if settings.static_dir:
        static_path = Path(settings.static_dir)
        if static_path.is_dir():
            app.mount("/", StaticFiles(directory=static_path, html=True), name="static")
        else:
            logger.warning("静态目录不存在，只提供 API: %s", static_path.resolve())

    return app


def main() -> None:
    setup_logging("INFO")
    try:
        settings = load_settings()
    except StartupConfigurationError as e:
        if "OPENWEATHER_API_KEY" in e.fields:
            logger.error("OPENWEATHER_API_KEY not found. Add it to a .env file or the environment.")
        logger.error("Startup aborted: %s", e)
        sys.exit(1)

    setup_logging(settings.log_level)
    app = create_app(settings)
    logger.info("Server running on http://%s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
