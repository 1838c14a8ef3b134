"""TaskService -- REST 层的任务/活动业务逻辑

每次写入与其活动日志在同一事务内提交：
- 创建任务 -> created 活动（system）
- 局部更新 -> updated / status_change 活动（user），描述列出变更字段
- 删除任务 -> 活动保留
"""

from datetime import UTC, datetime
from enum import Enum
from typing import Any

import structlog
from pydantic.alias_generators import to_camel
from taskpilot.core.models import (
    Activity,
    ActivityCreate,
    ActivityType,
    ActorId,
    Task,
    TaskCreate,
    TaskUpdate,
)
from taskpilot.core.store import (
    StoreGroup,
    append_activity,
    create_task_with_activity,
    delete_task,
    update_task_with_activity,
)
from ulid import ULID

log = structlog.get_logger()


def _display(value: Any) -> str:
    """活动描述中的字段取值展示"""
    if value is None:
        return "null"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def describe_changes(original: Task, updates: dict[str, Any]) -> str:
    """生成 "Task updated: key: old → new, ..." 形式的活动描述（key 为 camelCase）"""
    changes = ", ".join(
        f"{to_camel(key)}: {_display(getattr(original, key))} → {_display(value)}"
        for key, value in updates.items()
    )
    return f"Task updated: {changes}"


class TaskService:
    """任务业务服务"""

    def __init__(self, store_group: StoreGroup) -> None:
        self._stores = store_group

    async def list_tasks(self) -> list[Task]:
        return await self._stores.task_store.list_tasks()

    async def get_task(self, task_id: str) -> Task | None:
        return await self._stores.task_store.get_task(task_id)

    async def create_task(self, payload: TaskCreate) -> Task:
        """创建任务，并写入 created 活动"""
        now = datetime.now(UTC)
        task = Task(
            id=str(ULID()),
            created_at=now,
            updated_at=now,
            **payload.model_dump(),
        )
        activity = Activity(
            id=str(ULID()),
            task_id=task.id,
            type=ActivityType.CREATED,
            description=f'Task "{task.title}" created',
            remarks=task.description or None,
            user_id=ActorId.SYSTEM.value,
            created_at=now,
        )
        await create_task_with_activity(
            self._stores.conn,
            self._stores.task_store,
            self._stores.activity_store,
            task,
            activity,
        )
        await log.ainfo("task_created", task_id=task.id, source="rest")
        return task

    async def update_task(self, task_id: str, payload: TaskUpdate) -> Task | None:
        """局部更新任务

        Returns:
            更新后的 Task；任务不存在时返回 None（不写活动）
        """
        original = await self._stores.task_store.get_task(task_id)
        if original is None:
            return None

        updates = payload.to_updates()
        now = datetime.now(UTC)
        activity = Activity(
            id=str(ULID()),
            task_id=task_id,
            type=ActivityType.STATUS_CHANGE if "status" in updates else ActivityType.UPDATED,
            description=describe_changes(original, updates),
            remarks="Updated by user",
            user_id=ActorId.USER.value,
            created_at=now,
        )
        task = await update_task_with_activity(
            self._stores.conn,
            self._stores.task_store,
            self._stores.activity_store,
            task_id,
            updates,
            now,
            activity,
        )
        await log.ainfo(
            "task_updated",
            task_id=task_id,
            fields=sorted(updates),
            found=task is not None,
            source="rest",
        )
        return task

    async def delete_task(self, task_id: str) -> bool:
        """删除任务，返回是否存在"""
        deleted = await delete_task(self._stores.conn, self._stores.task_store, task_id)
        if deleted:
            await log.ainfo("task_deleted", task_id=task_id, source="rest")
        return deleted

    async def list_activities(self, task_id: str) -> list[Activity]:
        """任务的活动日志，最新在前"""
        return await self._stores.activity_store.list_activities_for_task(task_id)

    async def add_activity(self, task_id: str, payload: ActivityCreate) -> Activity | None:
        """追加活动；任务不存在时返回 None"""
        if await self._stores.task_store.get_task(task_id) is None:
            return None

        activity = Activity(
            id=str(ULID()),
            task_id=task_id,
            created_at=datetime.now(UTC),
            **payload.model_dump(),
        )
        await append_activity(self._stores.conn, self._stores.activity_store, activity)
        return activity
