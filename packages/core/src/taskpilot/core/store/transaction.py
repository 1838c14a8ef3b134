"""原子事务封装

Store 方法本身不提交；此处把一次业务写入（任务 + 活动、单条活动、单条消息、删除）
封装为一个 SQLite 事务，失败时回滚并重新抛出。

所有请求共享同一个连接，原子性只在单个请求内成立：
并发请求之间的 commit / rollback 会作用于对方尚未提交的写入。
"""

from datetime import datetime
from typing import Any

import aiosqlite

from ..models.activity import Activity
from ..models.chat import ChatMessage
from ..models.task import Task
from .protocols import ActivityStore, ChatStore, TaskStore


async def create_task_with_activity(
    conn: aiosqlite.Connection,
    task_store: TaskStore,
    activity_store: ActivityStore,
    task: Task,
    activity: Activity,
) -> None:
    """在同一事务内写入新任务及其 created 活动

    Raises:
        Exception: 如果事务提交失败，自动回滚
    """
    try:
        await task_store.create_task(task)
        await activity_store.append_activity(activity)
        await conn.commit()
    except Exception:
        await conn.rollback()
        raise


async def update_task_with_activity(
    conn: aiosqlite.Connection,
    task_store: TaskStore,
    activity_store: ActivityStore,
    task_id: str,
    updates: dict[str, Any],
    updated_at: datetime,
    activity: Activity | None = None,
) -> Task | None:
    """在同一事务内局部更新任务并（可选）追加活动

    任务不存在时不写入活动，返回 None。
    """
    try:
        task = await task_store.update_task(task_id, updates, updated_at)
        if task is not None and activity is not None:
            await activity_store.append_activity(activity)
        await conn.commit()
        return task
    except Exception:
        await conn.rollback()
        raise


async def append_activity(
    conn: aiosqlite.Connection,
    activity_store: ActivityStore,
    activity: Activity,
) -> None:
    """仅追加一条活动"""
    try:
        await activity_store.append_activity(activity)
        await conn.commit()
    except Exception:
        await conn.rollback()
        raise


async def append_chat_message(
    conn: aiosqlite.Connection,
    chat_store: ChatStore,
    message: ChatMessage,
) -> None:
    """追加一条对话消息"""
    try:
        await chat_store.append_message(message)
        await conn.commit()
    except Exception:
        await conn.rollback()
        raise


async def delete_task(
    conn: aiosqlite.Connection,
    task_store: TaskStore,
    task_id: str,
) -> bool:
    """删除任务（活动日志保留）"""
    try:
        deleted = await task_store.delete_task(task_id)
        await conn.commit()
        return deleted
    except Exception:
        await conn.rollback()
        raise
