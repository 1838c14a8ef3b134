"""枚举定义

包含 TaskStatus、TaskPriority、ActivityType、ChatRole 枚举以及活动日志的操作者标识。
任务状态之间不设流转约束：任意状态都可以切换到任意状态。
"""

from enum import StrEnum


class TaskStatus(StrEnum):
    """任务状态"""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


class TaskPriority(StrEnum):
    """任务优先级"""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ActivityType(StrEnum):
    """活动日志类型"""

    CREATED = "created"
    UPDATED = "updated"
    COMPLETED = "completed"
    STATUS_CHANGE = "status_change"
    COMMENT = "comment"


class ChatRole(StrEnum):
    """对话消息角色"""

    USER = "user"
    ASSISTANT = "assistant"


class ActorId(StrEnum):
    """活动日志中的合成操作者标识"""

    SYSTEM = "system"
    USER = "user"
    AI_ASSISTANT = "ai-assistant"
