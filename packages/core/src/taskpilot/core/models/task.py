"""Task Domain Model

tasks 表的行模型以及 REST 层的创建/局部更新载荷。
updated_at 在每次变更时刷新，始终不早于 created_at。
due_date 一律按 UTC 存储：不带时区的输入视为 UTC。
"""

from datetime import UTC, datetime

from pydantic import ConfigDict, Field, field_validator

from .base import CamelModel
from .enums import TaskPriority, TaskStatus


def ensure_utc(value: datetime) -> datetime:
    """不带时区的时间补上 UTC，带时区的转换为 UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class Task(CamelModel):
    """Task 数据模型"""

    id: str = Field(description="唯一标识，ULID 格式")
    title: str = Field(min_length=1, description="任务标题")
    description: str | None = Field(default=None, description="任务描述")
    status: TaskStatus = Field(default=TaskStatus.NOT_STARTED, description="当前状态")
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM, description="优先级")
    assigned_to: str | None = Field(default=None, description="负责人（自由文本）")
    due_date: datetime | None = Field(default=None, description="截止时间")
    # 预留字段，当前恒为 None
    dependencies: list[str] | None = Field(default=None, description="依赖任务（预留）")
    created_at: datetime = Field(description="创建时间")
    updated_at: datetime = Field(description="更新时间")


class TaskCreate(CamelModel):
    """POST /api/tasks 请求体 -- Task 字段去掉 id、时间戳和预留的 dependencies"""

    model_config = ConfigDict(extra="ignore")

    title: str = Field(min_length=1)
    description: str | None = None
    status: TaskStatus = TaskStatus.NOT_STARTED
    priority: TaskPriority = TaskPriority.MEDIUM
    assigned_to: str | None = None
    due_date: datetime | None = None

    @field_validator("due_date")
    @classmethod
    def _due_date_utc(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value) if value is not None else None


class TaskUpdate(CamelModel):
    """PATCH /api/tasks/{id} 请求体

    所有字段可选，仅应用请求中实际出现的字段（exclude_unset）。
    """

    model_config = ConfigDict(extra="ignore")

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    assigned_to: str | None = None
    due_date: datetime | None = None

    @field_validator("title", "status", "priority")
    @classmethod
    def _reject_null(cls, value):
        # 这三列 NOT NULL：显式传 null 视为非法请求
        if value is None:
            raise ValueError("field cannot be null")
        return value

    @field_validator("due_date")
    @classmethod
    def _due_date_utc(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value) if value is not None else None

    def to_updates(self) -> dict:
        """返回只包含显式提交字段的更新字典（字段名为 snake_case）"""
        return self.model_dump(exclude_unset=True)
