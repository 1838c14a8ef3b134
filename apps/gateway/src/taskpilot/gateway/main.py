"""FastAPI 应用主文件

app 创建 + lifespan 管理：DB 初始化/关闭 + LLM 组件初始化 + 路由注册。
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

import structlog
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from taskpilot.core.config import get_db_path
from taskpilot.core.store import create_store_group
from taskpilot.provider import EchoMessageAdapter, LiteLLMClient, load_provider_config

from .errors import register_exception_handlers
from .middleware.logging_config import setup_logfire, setup_logging
from .middleware.logging_mw import LoggingMiddleware
from .middleware.trace_mw import TraceMiddleware
from .routes import activities, chat, health, tasks
from .services.intent_parser import IntentParser
from .services.llm_service import LLMService
from .services.response_generator import ResponseGenerator

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期管理：启动时初始化 DB 和 LLM 组件，关闭时清理连接"""
    db_path = get_db_path()
    store_group = await create_store_group(db_path)
    app.state.store_group = store_group

    provider_config = load_provider_config()
    app.state.provider_config = provider_config

    if provider_config.llm_mode == "litellm":
        client = LiteLLMClient(
            api_base=provider_config.api_base,
            api_key=provider_config.api_key.get_secret_value(),
            timeout_s=provider_config.timeout_s,
        )
        log.info(
            "llm_service_initialized",
            mode="litellm",
            model=provider_config.model,
            endpoint=client.endpoint,
            timeout_s=provider_config.timeout_s,
        )
    else:
        # Echo 模式：离线运行，意图解析恒降级为 list_tasks
        client = EchoMessageAdapter()
        log.info("llm_service_initialized", mode="echo")

    llm_service = LLMService(client, model=provider_config.model)
    app.state.llm_service = llm_service
    app.state.intent_classifier = IntentParser(llm_service)
    app.state.reply_narrator = ResponseGenerator(llm_service)

    yield

    if hasattr(app.state, "store_group") and app.state.store_group:
        await app.state.store_group.conn.close()


def create_app() -> FastAPI:
    """创建 FastAPI 应用实例"""
    app = FastAPI(
        title="TaskPilot Gateway",
        version="0.1.0",
        description="eRupi 试点项目任务追踪 API + AI 对话助手",
        lifespan=lifespan,
    )

    # 注册中间件（顺序：先 Trace 后 Logging，Logging 位于最外层）
    app.add_middleware(TraceMiddleware)
    app.add_middleware(LoggingMiddleware)

    register_exception_handlers(app)

    setup_logging()
    setup_logfire(app)

    app.include_router(tasks.router, tags=["tasks"])
    app.include_router(activities.router, tags=["activities"])
    app.include_router(chat.router, tags=["chat"])
    app.include_router(health.router, tags=["health"])

    # 挂载前端静态文件（frontend/dist/ -> /），在所有 API 路由之后
    gateway_root = Path(__file__).resolve().parent
    frontend_dist = gateway_root.parents[4] / "frontend" / "dist"
    if frontend_dist.exists():
        app.mount("/", StaticFiles(directory=str(frontend_dist), html=True), name="frontend")

    return app


# 默认 app 实例（uvicorn 入口）
app = create_app()
