"""TaskPilot Core Store -- SQLite 持久化实现

提供工厂函数创建共享数据库连接的 Store 实例组。
"""

from pathlib import Path

import aiosqlite

from .activity_store import SqliteActivityStore
from .chat_store import SqliteChatStore
from .protocols import ActivityStore, ChatStore, TaskStore
from .sqlite_init import init_db
from .task_store import SqliteTaskStore
from .transaction import (
    append_activity,
    append_chat_message,
    create_task_with_activity,
    delete_task,
    update_task_with_activity,
)


class StoreGroup:
    """Store 实例组 -- 共享同一个数据库连接"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self.conn = conn
        self.task_store: TaskStore = SqliteTaskStore(conn)
        self.activity_store: ActivityStore = SqliteActivityStore(conn)
        self.chat_store: ChatStore = SqliteChatStore(conn)


async def create_store_group(db_path: str) -> StoreGroup:
    """创建 Store 实例组

    Args:
        db_path: SQLite 数据库文件路径

    Returns:
        StoreGroup 实例
    """
    # 确保数据库目录存在
    db_dir = Path(db_path).parent
    db_dir.mkdir(parents=True, exist_ok=True)

    conn = await aiosqlite.connect(db_path)
    conn.row_factory = aiosqlite.Row
    await init_db(conn)

    return StoreGroup(conn=conn)


__all__ = [
    "StoreGroup",
    "create_store_group",
    "TaskStore",
    "ActivityStore",
    "ChatStore",
    "SqliteTaskStore",
    "SqliteActivityStore",
    "SqliteChatStore",
    "init_db",
    "create_task_with_activity",
    "update_task_with_activity",
    "append_activity",
    "append_chat_message",
    "delete_task",
]
