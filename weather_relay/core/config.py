# weather_relay/core/config.py
from __future__ import annotations

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from weather_relay.core.errors import StartupConfigurationError


class Settings(BaseSettings):

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    # 监听地址
    host: str = Field("0.0.0.0", alias="HOST")
    port: int = Field(3000, alias="PORT", ge=1, le=65535)

    # OpenWeatherMap（API key 必须提供，缺失时进程拒绝启动）
    openweather_api_key: str = Field(..., alias="OPENWEATHER_API_KEY", min_length=1)
    openweather_base_url: str = Field(
        "https://api.openweathermap.org",
        alias="OPENWEATHER_BASE_URL",
    )
    # 上游超时（秒）
    openweather_timeout: float = Field(5.0, alias="OPENWEATHER_TIMEOUT", gt=0)
    # metric = 摄氏度，imperial = 华氏度
    openweather_units: str = Field("metric", alias="OPENWEATHER_UNITS")

    # 前端静态文件目录，留空则只提供 API
    static_dir: str = Field("public", alias="STATIC_DIR")

    log_level: str = Field("INFO", alias="LOG_LEVEL")

    @property
    def current_weather_url(self) -> str:
        return f"{self.openweather_base_url.rstrip('/')}/data/2.5/weather"


def load_settings(**overrides) -> Settings:
    """
    进程入口处读取一次配置。

    pydantic 的 ValidationError 统一转成 StartupConfigurationError，
    错误信息里带上出问题的环境变量名。
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        names = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
        raise StartupConfigurationError(
            f"Invalid or missing configuration: {', '.join(names) or 'unknown'}",
            fields=names,
        ) from e
