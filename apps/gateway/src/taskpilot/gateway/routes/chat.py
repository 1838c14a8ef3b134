"""对话路由

GET  /api/chat/messages?limit=N  最近 N 条对话（按时间正序）
POST /api/chat                   发送一条消息，返回用户消息、助手回复与操作结果
"""

from fastapi import APIRouter, Depends, Query
from pydantic import Field, StrictStr
from taskpilot.core.config import get_chat_history_limit
from taskpilot.core.models import CamelModel, ChatMessage
from taskpilot.core.store import StoreGroup

from ..deps import get_chat_service, get_store_group
from ..services.chat_service import ChatService, ChatTurn

router = APIRouter()


class ChatRequest(CamelModel):
    """对话请求体"""

    content: StrictStr = Field(min_length=1, description="用户消息")


@router.get("/api/chat/messages", response_model=list[ChatMessage])
async def list_chat_messages(
    limit: int | None = Query(default=None, ge=1, description="返回条数，默认 50"),
    store_group: StoreGroup = Depends(get_store_group),
):
    messages = await store_group.chat_store.list_recent_messages(
        limit or get_chat_history_limit()
    )
    # Store 返回最新在前，接口按时间正序返回
    return list(reversed(messages))


@router.post("/api/chat", response_model=ChatTurn)
async def chat(body: ChatRequest, service: ChatService = Depends(get_chat_service)):
    """处理一轮对话

    操作失败时仍返回 200，operationResult.success 为 false。
    """
    return await service.handle_message(body.content)
