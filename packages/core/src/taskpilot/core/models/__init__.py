"""TaskPilot Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .activity import Activity, ActivityCreate
from .base import CamelModel
from .chat import ChatMessage
from .enums import ActivityType, ActorId, ChatRole, TaskPriority, TaskStatus
from .operation import (
    KNOWN_ACTIONS,
    AddRemarkOperation,
    CompleteOperation,
    CreateOperation,
    DeleteOperation,
    GetStatusOperation,
    ListTasksOperation,
    OperationResult,
    TaskOperation,
    TaskStats,
    UnknownOperation,
    UpdateOperation,
    parse_operation,
)
from .task import Task, TaskCreate, TaskUpdate, ensure_utc

__all__ = [
    # 枚举
    "TaskStatus",
    "TaskPriority",
    "ActivityType",
    "ChatRole",
    "ActorId",
    # 基类
    "CamelModel",
    # Task
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "ensure_utc",
    # Activity
    "Activity",
    "ActivityCreate",
    # Chat
    "ChatMessage",
    # Operation
    "KNOWN_ACTIONS",
    "TaskOperation",
    "CreateOperation",
    "UpdateOperation",
    "CompleteOperation",
    "DeleteOperation",
    "AddRemarkOperation",
    "GetStatusOperation",
    "ListTasksOperation",
    "UnknownOperation",
    "parse_operation",
    "OperationResult",
    "TaskStats",
]
