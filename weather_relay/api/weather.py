# weather_relay/api/weather.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from weather_relay.clients.openweather_client import OpenWeatherClient
from weather_relay.schemas.weather_schemas import ErrorResponse, WeatherResult
from weather_relay.services.weather_service import WeatherService

router = APIRouter(tags=["weather"])


def get_weather_service(request: Request) -> WeatherService:
    # 共享 lifespan 里创建的 AsyncClient，配置从 app.state 取，不读全局
    client = OpenWeatherClient(request.app.state.http_client, request.app.state.settings)
    return WeatherService(openweather_client=client)


@router.get(
    "/weather",
    response_model=WeatherResult,
    response_model_exclude_none=True,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def get_weather(
    # 不用 Query(...)：缺参数和空字符串都要走同一个 400 文案
    city: Optional[str] = Query(None, description="城市名，例如 London"),
    service: WeatherService = Depends(get_weather_service),
) -> WeatherResult:
    return await service.get_weather_by_city(city)
