from __future__ import annotations

from fastapi import APIRouter

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/liveness")
async def liveness():
    # 进程活着就算 OK，不访问上游
    return {"status": "ok"}
