from __future__ import annotations

import uuid
from fastapi import Request
from starlette.responses import Response

from weather_relay.core.log_setup import request_id_var

REQUEST_ID_HEADER = "X-Request-ID"


async def request_id_middleware(request: Request, call_next):
    # 上游网关带了就沿用，否则自己生成
    rid = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    request.state.request_id = rid
    token = request_id_var.set(rid)
    try:
        response: Response = await call_next(request)
    finally:
        request_id_var.reset(token)
    response.headers[REQUEST_ID_HEADER] = rid
    return response
