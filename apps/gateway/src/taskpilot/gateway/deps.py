"""依赖注入模块 -- 通过 FastAPI Depends 注入 Store 与服务实例

Store 与 LLM 相关组件通过 app.state 管理，在 lifespan 中初始化/清理；
测试可直接替换 app.state 上的 intent_classifier / reply_narrator。
"""

from fastapi import Depends, Request
from taskpilot.core.store import StoreGroup

from .services.chat_service import ChatService
from .services.task_service import TaskService


def get_store_group(request: Request) -> StoreGroup:
    """从 app.state 获取 StoreGroup 实例"""
    return request.app.state.store_group


def get_task_service(store_group: StoreGroup = Depends(get_store_group)) -> TaskService:
    return TaskService(store_group)


def get_chat_service(
    request: Request,
    store_group: StoreGroup = Depends(get_store_group),
) -> ChatService:
    """组装对话服务：意图解析与回复生成来自 app.state"""
    return ChatService(
        store_group,
        classifier=request.app.state.intent_classifier,
        narrator=request.app.state.reply_narrator,
    )
