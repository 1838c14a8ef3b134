"""TaskStore SQLite 实现

此处仅提供数据库操作，不提交事务；提交由 transaction 模块负责。
"""

import json
from datetime import datetime
from typing import Any

import aiosqlite

from ..models.task import Task

_COLUMNS = (
    "id, title, description, status, priority, assigned_to, due_date, "
    "dependencies, created_at, updated_at"
)

# 允许局部更新的列
_UPDATABLE_COLUMNS = frozenset(
    {"title", "description", "status", "priority", "assigned_to", "due_date"}
)


class SqliteTaskStore:
    """TaskStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def create_task(self, task: Task) -> None:
        """创建任务记录"""
        await self._conn.execute(
            f"""
            INSERT INTO tasks ({_COLUMNS})
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                task.id,
                task.title,
                task.description,
                task.status.value,
                task.priority.value,
                task.assigned_to,
                task.due_date.isoformat() if task.due_date else None,
                json.dumps(task.dependencies) if task.dependencies is not None else None,
                task.created_at.isoformat(),
                task.updated_at.isoformat(),
            ),
        )

    async def get_task(self, task_id: str) -> Task | None:
        """根据 id 查询任务"""
        cursor = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM tasks WHERE id = ?",
            (task_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_task(row)

    async def list_tasks(self) -> list[Task]:
        """查询全部任务，按 created_at 正序"""
        cursor = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM tasks ORDER BY created_at ASC, rowid ASC"
        )
        rows = await cursor.fetchall()
        return [self._row_to_task(row) for row in rows]

    async def count_tasks(self) -> int:
        """任务总数"""
        cursor = await self._conn.execute("SELECT COUNT(*) FROM tasks")
        row = await cursor.fetchone()
        return row[0] if row else 0

    async def update_task(
        self,
        task_id: str,
        updates: dict[str, Any],
        updated_at: datetime,
    ) -> Task | None:
        """局部更新任务并刷新 updated_at

        Args:
            task_id: 任务 ID
            updates: 列名 -> 新值，仅允许 _UPDATABLE_COLUMNS 中的列
            updated_at: 新的更新时间

        Returns:
            更新后的 Task，任务不存在时返回 None
        """
        unknown = set(updates) - _UPDATABLE_COLUMNS
        if unknown:
            raise ValueError(f"Columns not updatable: {sorted(unknown)}")

        assignments = ["updated_at = ?"]
        params: list[Any] = [updated_at.isoformat()]
        for column, value in updates.items():
            assignments.append(f"{column} = ?")
            params.append(self._to_db_value(value))
        params.append(task_id)

        cursor = await self._conn.execute(
            f"UPDATE tasks SET {', '.join(assignments)} WHERE id = ?",
            params,
        )
        if cursor.rowcount == 0:
            return None
        return await self.get_task(task_id)

    async def delete_task(self, task_id: str) -> bool:
        """删除任务，返回是否确有记录被删除"""
        cursor = await self._conn.execute(
            "DELETE FROM tasks WHERE id = ?",
            (task_id,),
        )
        return cursor.rowcount > 0

    @staticmethod
    def _to_db_value(value: Any) -> Any:
        if isinstance(value, datetime):
            return value.isoformat()
        # StrEnum 直接取字符串值
        if isinstance(value, str):
            return str(value)
        return value

    @staticmethod
    def _row_to_task(row: aiosqlite.Row) -> Task:
        """将数据库行转换为 Task 模型"""
        return Task(
            id=row[0],
            title=row[1],
            description=row[2],
            status=row[3],
            priority=row[4],
            assigned_to=row[5],
            due_date=datetime.fromisoformat(row[6]) if row[6] else None,
            dependencies=json.loads(row[7]) if row[7] else None,
            created_at=datetime.fromisoformat(row[8]),
            updated_at=datetime.fromisoformat(row[9]),
        )
