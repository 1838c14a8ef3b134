"""ChatStore SQLite 实现 -- 对话记录 append-only"""

from datetime import datetime

import aiosqlite

from ..models.chat import ChatMessage

_COLUMNS = "id, content, role, task_id, created_at"


class SqliteChatStore:
    """ChatStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def append_message(self, message: ChatMessage) -> None:
        """追加对话消息（不自动提交）"""
        await self._conn.execute(
            f"INSERT INTO chat_messages ({_COLUMNS}) VALUES (?, ?, ?, ?, ?)",
            (
                message.id,
                message.content,
                message.role.value,
                message.task_id,
                message.created_at.isoformat(),
            ),
        )

    async def list_recent_messages(self, limit: int = 50) -> list[ChatMessage]:
        """查询最近的 limit 条消息，最新在前"""
        cursor = await self._conn.execute(
            f"""
            SELECT {_COLUMNS} FROM chat_messages
            ORDER BY created_at DESC, rowid DESC
            LIMIT ?
            """,
            (limit,),
        )
        rows = await cursor.fetchall()
        return [
            ChatMessage(
                id=row[0],
                content=row[1],
                role=row[2],
                task_id=row[3],
                created_at=datetime.fromisoformat(row[4]),
            )
            for row in rows
        ]
