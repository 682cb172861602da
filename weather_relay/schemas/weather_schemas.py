# weather_relay/schemas/weather_schemas.py
from __future__ import annotations

from typing import Annotated, Optional, Union

from pydantic import AllowInfNan, BaseModel, StrictFloat, StrictInt


# 所有字段都允许缺省：上游没给就不返回，不补默认值

# 数值原样转发：整数还是整数，不接受字符串/布尔；inf、nan 视为脏数据
Number = Union[StrictInt, Annotated[StrictFloat, AllowInfNan(False)]]


class Coordinates(BaseModel):
    lat: Optional[Number] = None
    lon: Optional[Number] = None


class WeatherCondition(BaseModel):
    main: Optional[str] = None
    description: Optional[str] = None
    icon: Optional[str] = None  # 图标代码，例如 "10d"


class TemperatureInfo(BaseModel):
    current: Optional[Number] = None
    feels_like: Optional[Number] = None
    min: Optional[Number] = None
    max: Optional[Number] = None
    humidity: Optional[Number] = None


class WindInfo(BaseModel):
    speed: Optional[Number] = None
    deg: Optional[Number] = None


class WeatherResult(BaseModel):
    city: Optional[str] = None
    country: Optional[str] = None
    coordinates: Optional[Coordinates] = None
    weather: WeatherCondition = WeatherCondition()
    temp: TemperatureInfo = TemperatureInfo()
    wind: WindInfo = WindInfo()


class ErrorResponse(BaseModel):
    error: str
