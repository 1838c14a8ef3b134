"""Store Protocol 接口定义

定义 TaskStore、ActivityStore、ChatStore 的抽象接口，
使用 Python Protocol 实现结构化子类型（duck typing），
调用方依赖接口而非 SQLite 实现，便于替换为测试替身或其他存储引擎。
"""

from datetime import datetime
from typing import Any, Protocol

from ..models.activity import Activity
from ..models.chat import ChatMessage
from ..models.task import Task


class TaskStore(Protocol):
    """Task 存储接口"""

    async def create_task(self, task: Task) -> None:
        """创建任务记录"""
        ...

    async def get_task(self, task_id: str) -> Task | None:
        """根据 id 查询任务"""
        ...

    async def list_tasks(self) -> list[Task]:
        """查询全部任务"""
        ...

    async def count_tasks(self) -> int:
        """任务总数"""
        ...

    async def update_task(
        self,
        task_id: str,
        updates: dict[str, Any],
        updated_at: datetime,
    ) -> Task | None:
        """局部更新任务，任务不存在时返回 None"""
        ...

    async def delete_task(self, task_id: str) -> bool:
        """删除任务，返回是否删除成功"""
        ...


class ActivityStore(Protocol):
    """Activity 存储接口

    活动表 append-only：只允许插入，不允许更新或删除。
    """

    async def append_activity(self, activity: Activity) -> None:
        """追加活动（append-only）"""
        ...

    async def list_activities_for_task(self, task_id: str) -> list[Activity]:
        """查询指定任务的所有活动（最新在前）"""
        ...


class ChatStore(Protocol):
    """ChatMessage 存储接口"""

    async def append_message(self, message: ChatMessage) -> None:
        """追加对话消息"""
        ...

    async def list_recent_messages(self, limit: int = 50) -> list[ChatMessage]:
        """查询最近的消息（最新在前）"""
        ...
