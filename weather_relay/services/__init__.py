"""服务层模块"""

from .weather_service import WeatherService, convert_openweather_payload

__all__ = ["WeatherService", "convert_openweather_payload"]
