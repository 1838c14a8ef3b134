"""ActivityStore SQLite 实现

活动表 append-only：只允许插入，不允许更新或删除。
"""

from datetime import datetime

import aiosqlite

from ..models.activity import Activity

_COLUMNS = "id, task_id, type, description, remarks, user_id, created_at"


class SqliteActivityStore:
    """ActivityStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def append_activity(self, activity: Activity) -> None:
        """追加活动（append-only）

        注意：此方法不自动提交事务，需由调用方管理事务。
        """
        await self._conn.execute(
            f"INSERT INTO activities ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?)",
            (
                activity.id,
                activity.task_id,
                activity.type.value,
                activity.description,
                activity.remarks,
                activity.user_id,
                activity.created_at.isoformat(),
            ),
        )

    async def list_activities_for_task(self, task_id: str) -> list[Activity]:
        """查询指定任务的所有活动，按 created_at 倒序（最新在前）"""
        cursor = await self._conn.execute(
            f"""
            SELECT {_COLUMNS} FROM activities
            WHERE task_id = ?
            ORDER BY created_at DESC, rowid DESC
            """,
            (task_id,),
        )
        rows = await cursor.fetchall()
        return [self._row_to_activity(row) for row in rows]

    @staticmethod
    def _row_to_activity(row: aiosqlite.Row) -> Activity:
        """将数据库行转换为 Activity 模型"""
        return Activity(
            id=row[0],
            task_id=row[1],
            type=row[2],
            description=row[3],
            remarks=row[4],
            user_id=row[5],
            created_at=datetime.fromisoformat(row[6]),
        )
