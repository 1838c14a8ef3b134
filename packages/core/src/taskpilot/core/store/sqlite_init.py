"""SQLite 数据库初始化

PRAGMA 配置 + 三张表 DDL + 索引创建。
使用 aiosqlite 异步操作。
"""

import aiosqlite

# tasks 表 DDL
_TASKS_DDL = """
CREATE TABLE IF NOT EXISTS tasks (
    id           TEXT PRIMARY KEY,
    title        TEXT NOT NULL,
    description  TEXT,
    status       TEXT NOT NULL DEFAULT 'not_started',
    priority     TEXT NOT NULL DEFAULT 'medium',
    assigned_to  TEXT,
    due_date     TEXT,
    dependencies TEXT,
    created_at   TEXT NOT NULL,
    updated_at   TEXT NOT NULL
);
"""

_TASKS_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_tasks_status ON tasks(status);",
    "CREATE INDEX IF NOT EXISTS idx_tasks_created_at ON tasks(created_at);",
]

# activities 表 DDL
# task_id 不设外键：任务删除后活动日志保留用于审计
_ACTIVITIES_DDL = """
CREATE TABLE IF NOT EXISTS activities (
    id          TEXT PRIMARY KEY,
    task_id     TEXT NOT NULL,
    type        TEXT NOT NULL,
    description TEXT NOT NULL,
    remarks     TEXT,
    user_id     TEXT,
    created_at  TEXT NOT NULL
);
"""

_ACTIVITIES_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_activities_task_ts ON activities(task_id, created_at DESC);",
]

# chat_messages 表 DDL
_CHAT_MESSAGES_DDL = """
CREATE TABLE IF NOT EXISTS chat_messages (
    id          TEXT PRIMARY KEY,
    content     TEXT NOT NULL,
    role        TEXT NOT NULL,
    task_id     TEXT,
    created_at  TEXT NOT NULL
);
"""

_CHAT_MESSAGES_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_chat_messages_created_at ON chat_messages(created_at DESC);",
]


async def init_db(conn: aiosqlite.Connection) -> None:
    """初始化数据库：设置 PRAGMA + 创建表 + 创建索引

    Args:
        conn: aiosqlite 数据库连接
    """
    # 设置 PRAGMA
    await conn.execute("PRAGMA journal_mode = WAL;")
    await conn.execute("PRAGMA foreign_keys = ON;")
    await conn.execute("PRAGMA busy_timeout = 5000;")

    # 创建表
    await conn.execute(_TASKS_DDL)
    await conn.execute(_ACTIVITIES_DDL)
    await conn.execute(_CHAT_MESSAGES_DDL)

    # 创建索引
    for idx_sql in _TASKS_INDEXES + _ACTIVITIES_INDEXES + _CHAT_MESSAGES_INDEXES:
        await conn.execute(idx_sql)

    await conn.commit()


async def verify_wal_mode(conn: aiosqlite.Connection) -> bool:
    """验证 WAL 模式是否生效

    Returns:
        True 如果 WAL 模式已启用
    """
    cursor = await conn.execute("PRAGMA journal_mode;")
    row = await cursor.fetchone()
    return row is not None and row[0].lower() == "wal"
