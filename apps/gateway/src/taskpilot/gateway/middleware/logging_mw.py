"""LoggingMiddleware -- 请求级 request_id 与耗时

request_id 优先沿用调用方传入的 X-Request-ID（便于前端与日志对齐），
否则生成 ULID；绑定到 structlog contextvars 并通过 X-Request-ID 返回。
只有 /api/ 下的业务请求以 info 级别记录，健康检查与前端静态资源降为 debug。
"""

import re
import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from ulid import ULID

REQUEST_ID_HEADER = "X-Request-ID"

_REQUEST_ID_RE = re.compile(r"^[A-Za-z0-9._-]{1,64}$")
_QUIET_PATHS = frozenset({"/api/health", "/api/ready"})


def resolve_request_id(incoming: str | None) -> str:
    """沿用合法的外部 request_id，否则生成新的 ULID"""
    if incoming and _REQUEST_ID_RE.match(incoming):
        return incoming
    return str(ULID())


def _is_quiet(path: str) -> bool:
    return path in _QUIET_PATHS or not path.startswith("/api/")


class LoggingMiddleware(BaseHTTPMiddleware):
    """请求级日志中间件"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        path = request.url.path

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=path,
        )

        log = structlog.get_logger()
        emit = log.adebug if _is_quiet(path) else log.ainfo
        start = time.monotonic()

        try:
            response = await call_next(request)
        except Exception as e:
            await log.aerror(
                "request_failed",
                duration_ms=int((time.monotonic() - start) * 1000),
                error_type=type(e).__name__,
            )
            raise

        await emit(
            "request_completed",
            status_code=response.status_code,
            duration_ms=int((time.monotonic() - start) * 1000),
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
