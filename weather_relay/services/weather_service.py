# weather_relay/services/weather_service.py
from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx
from pydantic import ValidationError

from weather_relay.clients.openweather_client import OpenWeatherClient, redact_appid
from weather_relay.core.errors import CityNotFound, InvalidRequest, UpstreamFailure
from weather_relay.schemas.weather_schemas import WeatherResult

logger = logging.getLogger(__name__)


def _section(raw: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    # 上游缺字段 / 类型不对时当成空对象，叶子自然就是缺省
    value = raw.get(key)
    return value if isinstance(value, Mapping) else {}


def _first_condition(raw: Mapping[str, Any]) -> Mapping[str, Any]:
    conditions = raw.get("weather")
    if isinstance(conditions, list) and conditions and isinstance(conditions[0], Mapping):
        return conditions[0]
    return {}


def convert_openweather_payload(raw: Mapping[str, Any]) -> WeatherResult:
    """
    OpenWeatherMap 原始结构 -> 对外的精简结构。

    只挑需要的字段，其余全部丢弃；任何一层缺失都只会让对应叶子缺省，不会报错。
    叶子类型不对（比如温度是个对象）时 pydantic 会抛 ValidationError，由调用方处理。
    """
    sys = _section(raw, "sys")
    main = _section(raw, "main")
    wind = _section(raw, "wind")
    weather0 = _first_condition(raw)
    coord = raw.get("coord")

    return WeatherResult.model_validate(
        {
            "city": raw.get("name"),
            "country": sys.get("country"),
            "coordinates": (
                {"lat": coord.get("lat"), "lon": coord.get("lon")}
                if isinstance(coord, Mapping)
                else None
            ),
            "weather": {
                "main": weather0.get("main"),
                "description": weather0.get("description"),
                "icon": weather0.get("icon"),
            },
            "temp": {
                "current": main.get("temp"),
                "feels_like": main.get("feels_like"),
                "min": main.get("temp_min"),
                "max": main.get("temp_max"),
                "humidity": main.get("humidity"),
            },
            "wind": {
                "speed": wind.get("speed"),
                "deg": wind.get("deg"),
            },
        }
    )


class WeatherService:
    def __init__(self, openweather_client: OpenWeatherClient) -> None:
        self.openweather_client = openweather_client

    @staticmethod
    def _normalize_city(city: str | None) -> str:
        city = (city or "").strip()
        if not city:
            raise InvalidRequest()
        return city

    async def get_weather_by_city(self, city: str | None) -> WeatherResult:
        city = self._normalize_city(city)

        try:
            raw = await self.openweather_client.get_current_weather(city)
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status == 404:
                logger.info("OpenWeatherMap 未找到城市: %s", city)
                raise CityNotFound() from e
            logger.error(
                "Weather fetch error: upstream returned %s for city=%s: %s",
                status, city, redact_appid(str(e)),
            )
            raise UpstreamFailure() from e
        except httpx.HTTPError as e:
            # 超时、连接失败等传输层错误
            logger.error(
                "Weather fetch error: %s for city=%s: %s",
                type(e).__name__, city, redact_appid(str(e)),
            )
            raise UpstreamFailure() from e
        except ValueError as e:
            logger.error("Weather fetch error: upstream body is not JSON for city=%s: %s", city, e)
            raise UpstreamFailure() from e

        if not isinstance(raw, Mapping):
            logger.error(
                "Weather fetch error: upstream JSON is %s, expected object (city=%s)",
                type(raw).__name__, city,
            )
            raise UpstreamFailure()

        try:
            return convert_openweather_payload(raw)
        except ValidationError as e:
            logger.error(
                "Weather fetch error: malformed upstream payload for city=%s: %s",
                city, e.errors(include_url=False),
            )
            raise UpstreamFailure() from e
