# weather_relay/tests/conftest.py
from __future__ import annotations

from typing import Callable

import httpx
import pytest
import pytest_asyncio
from asgi_lifespan import LifespanManager

from weather_relay.core.config import Settings
from weather_relay.main import create_app


class FakeUpstream:
    """
    替代 OpenWeatherMap 的 MockTransport handler：
    - 记录每一次出站请求，方便断言调用次数 / 参数
    - handler 可以在用例里随时替换（返回 Response 或直接 raise httpx 异常）
    """

    def __init__(self) -> None:
        self.calls: list[httpx.Request] = []
        self.handler: Callable[[httpx.Request], httpx.Response] = (
            lambda request: httpx.Response(200, json={})
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        return self.handler(request)

    def respond_json(self, payload, status_code: int = 200) -> None:
        self.handler = lambda request: httpx.Response(status_code, json=payload)


@pytest.fixture
def settings() -> Settings:
    # 不读本地 .env，不挂静态目录
    return Settings(
        _env_file=None,
        OPENWEATHER_API_KEY="test-key",
        OPENWEATHER_BASE_URL="https://upstream.test",
        STATIC_DIR="",
    )


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest_asyncio.fixture
async def client(settings, upstream):
    """
    提供一个可用于 async 测试的 HTTP 客户端：
    - 触发 FastAPI lifespan（startup/shutdown）
    - 出站请求全部走 FakeUpstream，不会访问真实网络
    """
    app = create_app(settings, transport=httpx.MockTransport(upstream))

    async with LifespanManager(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(
            transport=transport,
            base_url="http://test",
        ) as ac:
            yield ac
