"""日志初始化：统一格式，每条日志带上当前请求的 request id"""
from __future__ import annotations

import logging
from contextvars import ContextVar

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(request_id)s | %(name)s | %(message)s"

# 由 request_id 中间件在每个请求开始时设置
request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


def setup_logging(level: str | int = "INFO") -> None:
    root = logging.getLogger()
    root.setLevel(level.upper() if isinstance(level, str) else level)

    # 重复调用（测试 / reload）时不要叠加 handler
    for h in list(root.handlers):
        if getattr(h, "_weather_relay", False):
            root.removeHandler(h)

    handler = logging.StreamHandler()
    handler._weather_relay = True  # type: ignore[attr-defined]
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(RequestIdFilter())
    root.addHandler(handler)
