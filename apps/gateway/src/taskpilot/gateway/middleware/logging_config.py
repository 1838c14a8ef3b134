"""structlog 配置模块

TASKPILOT_LOG_FORMAT 选择输出格式（dev / json），TASKPILOT_LOG_LEVEL 控制级别。
LiteLLM、httpx、aiosqlite 的逐请求/逐语句日志默认压到 WARNING，
除非 TASKPILOT_LOG_LEVEL=DEBUG。
Logfire APM 由 LOGFIRE_SEND_TO_LOGFIRE 控制。
"""

import logging
import os

import structlog
from fastapi import FastAPI

LOG_FORMATS = ("dev", "json")

# 这些库在 INFO 级别对每次模型调用 / SQL 语句都会输出日志
NOISY_LOGGERS = ("LiteLLM", "LiteLLM Router", "LiteLLM Proxy", "httpx", "httpcore", "aiosqlite")


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    return structlog.dev.ConsoleRenderer()


def setup_logging() -> None:
    """初始化 structlog，并让标准库日志（uvicorn / litellm）走同一个 renderer"""
    log_format = os.environ.get("TASKPILOT_LOG_FORMAT", "dev").lower()
    level_name = os.environ.get("TASKPILOT_LOG_LEVEL", "INFO").upper()
    level = logging.getLevelNamesMapping().get(level_name, logging.INFO)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=_renderer(log_format),
            foreign_pre_chain=shared_processors,
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    noisy_level = level if level <= logging.DEBUG else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(noisy_level)

    if log_format not in LOG_FORMATS:
        structlog.get_logger().warning(
            "invalid_log_format_config",
            env_var="TASKPILOT_LOG_FORMAT",
            value=log_format,
            fallback="dev",
        )


def setup_logfire(app: FastAPI) -> None:
    """LOGFIRE_SEND_TO_LOGFIRE=true 时启用 Logfire（需要 apm extra 与 LOGFIRE_TOKEN）"""
    if os.environ.get("LOGFIRE_SEND_TO_LOGFIRE", "false").lower() != "true":
        return

    try:
        import logfire

        logfire.configure(service_name="taskpilot-gateway")
        logfire.instrument_fastapi(app)
    except Exception as e:
        structlog.get_logger().warning(
            "logfire_init_failed",
            error_type=type(e).__name__,
            error=str(e),
        )
