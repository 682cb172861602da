# weather_relay/clients/openweather_client.py
from __future__ import annotations

import re
from typing import Any, Dict

import httpx

from weather_relay.core.config import Settings

REDACTED = "[REDACTED]"

# httpx 的异常信息里会带完整 URL（包含 appid），写日志前要抹掉
_APPID_RE = re.compile(r"(?i)\b(appid)=([^&\s'\"]+)")


def redact_appid(text: str) -> str:
    return _APPID_RE.sub(lambda m: f"{m.group(1)}={REDACTED}", text)


class OpenWeatherClient:
    """
    OpenWeatherMap 当前天气接口（/data/2.5/weather）

    - 每次调用只发一次 GET，不重试。
    - 非 2xx 直接 raise_for_status()，由 service 层决定怎么映射。
    """

    def __init__(self, http_client: httpx.AsyncClient, settings: Settings):
        self.http_client = http_client
        self.url = settings.current_weather_url
        self.api_key = settings.openweather_api_key
        self.units = settings.openweather_units
        self.timeout = settings.openweather_timeout

    async def get_current_weather(self, city: str) -> Dict[str, Any]:
        params = {
            "q": city,
            "appid": self.api_key,
            "units": self.units,
        }
        resp = await self.http_client.get(self.url, params=params, timeout=self.timeout)
        resp.raise_for_status()
        # 不是合法 JSON 时这里会抛 ValueError
        return resp.json()
