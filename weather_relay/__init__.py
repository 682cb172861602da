"""weather-relay：城市天气查询转发服务（OpenWeatherMap）"""

__version__ = "0.1.0"
