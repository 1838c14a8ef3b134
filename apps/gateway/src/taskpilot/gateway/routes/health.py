"""健康检查路由

GET /api/health: Liveness 检查，永远返回 200。
GET /api/ready: Readiness 检查，SQLite 连通性；profile=llm/full 时同时探测模型服务。
"""

from datetime import UTC, datetime

import structlog
from fastapi import APIRouter, Query, Request
from starlette.responses import JSONResponse

log = structlog.get_logger()

router = APIRouter()


@router.get("/api/health")
async def health():
    """Liveness 检查 -- 永远返回 200"""
    return {"status": "healthy", "timestamp": datetime.now(UTC).isoformat()}


@router.get("/api/ready")
async def ready(
    request: Request,
    profile: str | None = Query(
        default=None,
        description="core（默认）仅核心检查；llm/full 包含模型服务健康检查",
    ),
):
    """Readiness 检查 -- 验证核心依赖可用性

    检查项：
    1. sqlite: 数据库连通性
    2. llm: 根据 profile 决定是否探测模型服务
    """
    effective_profile = profile or "core"

    checks: dict[str, str] = {}
    all_ok = True

    try:
        store_group = request.app.state.store_group
        cursor = await store_group.conn.execute("SELECT 1")
        await cursor.fetchone()
        checks["sqlite"] = "ok"
    except Exception as e:
        checks["sqlite"] = f"error: {str(e)}"
        all_ok = False

    if effective_profile in ("llm", "full"):
        llm_service = getattr(request.app.state, "llm_service", None)
        if llm_service is None:
            checks["llm"] = "skipped"
        else:
            try:
                if await llm_service.health_check():
                    checks["llm"] = "ok"
                else:
                    checks["llm"] = "unreachable"
                    all_ok = False
            except Exception as e:
                log.warning("health_check_error", error=str(e))
                checks["llm"] = "unreachable"
                all_ok = False
    else:
        checks["llm"] = "skipped"

    status_code = 200 if all_ok else 503
    return JSONResponse(
        status_code=status_code,
        content={
            "status": "ready" if all_ok else "not_ready",
            "profile": effective_profile,
            "checks": checks,
        },
    )
