"""ChatMessage Domain Model -- 对话记录 append-only"""

from datetime import datetime

from pydantic import Field

from .base import CamelModel
from .enums import ChatRole


class ChatMessage(CamelModel):
    """ChatMessage 数据模型"""

    id: str = Field(description="唯一标识，ULID 格式")
    content: str = Field(description="消息文本")
    role: ChatRole = Field(description="user / assistant")
    task_id: str | None = Field(default=None, description="该消息影响到的任务")
    created_at: datetime = Field(description="创建时间")
