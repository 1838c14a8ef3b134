"""错误响应 -- 统一 {"error": {"code", "message"[, "details"]}} 结构

- RequestValidationError -> 400 INVALID_REQUEST
- TaskNotFoundError -> 404 TASK_NOT_FOUND
- 其余未处理异常 -> 500 INTERNAL_ERROR
"""

from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from starlette.responses import JSONResponse
from taskpilot.core.exceptions import TaskNotFoundError

log = structlog.get_logger()


def error_response(
    status_code: int,
    code: str,
    message: str,
    details: Any = None,
) -> JSONResponse:
    error: dict[str, Any] = {"code": code, "message": message}
    if details is not None:
        error["details"] = jsonable_encoder(details)
    return JSONResponse(status_code=status_code, content={"error": error})


async def _validation_error_handler(request: Request, exc: RequestValidationError):
    return error_response(400, "INVALID_REQUEST", "Invalid request data", exc.errors())


async def _task_not_found_handler(request: Request, exc: TaskNotFoundError):
    return error_response(404, "TASK_NOT_FOUND", str(exc))


async def _unhandled_error_handler(request: Request, exc: Exception):
    await log.aerror(
        "unhandled_error",
        error_type=type(exc).__name__,
        error=str(exc),
    )
    return error_response(500, "INTERNAL_ERROR", "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """注册全局异常处理器"""
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(TaskNotFoundError, _task_not_found_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
