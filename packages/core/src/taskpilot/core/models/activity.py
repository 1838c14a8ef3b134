"""Activity Domain Model

活动日志 append-only，写入后不再更新或删除。
每条活动弱关联一个任务：任务删除后活动保留用于审计。
"""

from datetime import datetime

from pydantic import ConfigDict, Field

from .base import CamelModel
from .enums import ActivityType


class Activity(CamelModel):
    """Activity 数据模型"""

    id: str = Field(description="唯一标识，ULID 格式")
    task_id: str = Field(description="关联的 Task ID")
    type: ActivityType = Field(description="活动类型")
    description: str = Field(min_length=1, description="可读摘要")
    remarks: str | None = Field(default=None, description="备注")
    user_id: str | None = Field(
        default=None,
        description="操作者标识，可为 system / user / ai-assistant 等合成值",
    )
    created_at: datetime = Field(description="创建时间")


class ActivityCreate(CamelModel):
    """POST /api/tasks/{id}/activities 请求体 -- task_id 来自路径"""

    model_config = ConfigDict(extra="ignore")

    type: ActivityType
    description: str = Field(min_length=1)
    remarks: str | None = None
    user_id: str | None = None
