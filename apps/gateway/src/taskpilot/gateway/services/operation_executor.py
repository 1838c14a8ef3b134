"""OperationExecutor -- TaskOperation -> Store 调用 -> OperationResult

按 action 分派，每个分支对应一组 Task/Activity Store 调用。
分派对 TaskOperation 联合类型穷尽匹配（assert_never），新增 action 未处理时类型检查即报错。
Store 抛出的异常不在分支内捕获，由 ChatService 统一折叠进结果。
"""

from collections import Counter
from datetime import UTC, datetime
from enum import StrEnum
from typing import TypeVar, assert_never

import structlog
from taskpilot.core.exceptions import TaskNotFoundError
from taskpilot.core.models import (
    Activity,
    ActivityType,
    ActorId,
    AddRemarkOperation,
    CompleteOperation,
    CreateOperation,
    DeleteOperation,
    GetStatusOperation,
    ListTasksOperation,
    OperationResult,
    Task,
    TaskOperation,
    TaskPriority,
    TaskStats,
    TaskStatus,
    UnknownOperation,
    UpdateOperation,
    ensure_utc,
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

E = TypeVar("E", bound=StrEnum)


def _coerce_enum(enum_cls: type[E], value: str | None, field: str) -> E | None:
    """把模型给出的字符串转为枚举；不合法的取值忽略"""
    if not value:
        return None
    try:
        return enum_cls(value.strip().lower())
    except ValueError:
        log.warning("operation_field_ignored", field=field, value=value)
        return None


def _parse_due_date(value: str | None) -> datetime | None:
    """解析 ISO 日期；无法解析时忽略"""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        log.warning("operation_field_ignored", field="due_date", value=value)
        return None
    return ensure_utc(parsed)


def compute_stats(tasks: list[Task]) -> TaskStats:
    """按状态统计任务数量"""
    counts = Counter(task.status for task in tasks)
    return TaskStats(
        total=len(tasks),
        completed=counts[TaskStatus.COMPLETED],
        in_progress=counts[TaskStatus.IN_PROGRESS],
        not_started=counts[TaskStatus.NOT_STARTED],
        failed=counts[TaskStatus.FAILED],
    )


class OperationExecutor:
    """对话操作执行器"""

    def __init__(self, store_group: StoreGroup) -> None:
        self._stores = store_group

    async def execute(self, operation: TaskOperation, user_text: str) -> OperationResult:
        """执行操作

        Args:
            operation: IntentParser 给出的结构化操作
            user_text: 用户原始消息，写入活动备注用于审计

        Returns:
            OperationResult；缺少必要字段时为 success=False（无 error）
        """
        match operation:
            case CreateOperation():
                return await self._create(operation, user_text)
            case UpdateOperation():
                return await self._update(operation)
            case CompleteOperation():
                return await self._complete(operation, user_text)
            case DeleteOperation():
                return await self._delete(operation)
            case AddRemarkOperation():
                return await self._add_remark(operation)
            case ListTasksOperation():
                return OperationResult(
                    success=True,
                    tasks=await self._stores.task_store.list_tasks(),
                )
            case GetStatusOperation():
                return await self._get_status(operation)
            case UnknownOperation():
                log.info("unknown_operation_action", action=operation.action)
                return OperationResult(success=False, error="Unknown action")
            case _:
                assert_never(operation)

    async def _create(self, op: CreateOperation, user_text: str) -> OperationResult:
        if not op.title:
            return OperationResult()

        now = datetime.now(UTC)
        task = Task(
            id=str(ULID()),
            title=op.title,
            description=op.description or "",
            status=_coerce_enum(TaskStatus, op.status, "status") or TaskStatus.NOT_STARTED,
            priority=(
                _coerce_enum(TaskPriority, op.priority, "priority") or TaskPriority.MEDIUM
            ),
            assigned_to=op.assigned_to or None,
            due_date=_parse_due_date(op.due_date),
            created_at=now,
            updated_at=now,
        )
        activity = Activity(
            id=str(ULID()),
            task_id=task.id,
            type=ActivityType.CREATED,
            description="Task created via AI assistant",
            remarks=f'Created from chat: "{user_text}"',
            user_id=ActorId.AI_ASSISTANT.value,
            created_at=now,
        )
        await create_task_with_activity(
            self._stores.conn,
            self._stores.task_store,
            self._stores.activity_store,
            task,
            activity,
        )
        await log.ainfo("task_created", task_id=task.id, source="chat")
        return OperationResult(success=True, task=task)

    async def _update(self, op: UpdateOperation) -> OperationResult:
        if not op.task_id:
            return OperationResult()

        # 取值为空（包括空字符串）的字段视为未提供
        updates: dict = {}
        if op.title:
            updates["title"] = op.title
        if op.description:
            updates["description"] = op.description
        if status := _coerce_enum(TaskStatus, op.status, "status"):
            updates["status"] = status
        if priority := _coerce_enum(TaskPriority, op.priority, "priority"):
            updates["priority"] = priority
        if op.assigned_to:
            updates["assigned_to"] = op.assigned_to
        if due_date := _parse_due_date(op.due_date):
            updates["due_date"] = due_date

        task = await update_task_with_activity(
            self._stores.conn,
            self._stores.task_store,
            self._stores.activity_store,
            op.task_id,
            updates,
            datetime.now(UTC),
        )
        await log.ainfo(
            "task_updated",
            task_id=op.task_id,
            fields=sorted(updates),
            found=task is not None,
            source="chat",
        )
        return OperationResult(success=True, task=task)

    async def _complete(self, op: CompleteOperation, user_text: str) -> OperationResult:
        if not op.task_id:
            return OperationResult()

        now = datetime.now(UTC)
        activity = Activity(
            id=str(ULID()),
            task_id=op.task_id,
            type=ActivityType.COMPLETED,
            description="Task marked as completed via AI assistant",
            remarks=f'Completed from chat: "{user_text}"',
            user_id=ActorId.AI_ASSISTANT.value,
            created_at=now,
        )
        task = await update_task_with_activity(
            self._stores.conn,
            self._stores.task_store,
            self._stores.activity_store,
            op.task_id,
            {"status": TaskStatus.COMPLETED},
            now,
            activity,
        )
        if task is None:
            raise TaskNotFoundError(op.task_id)

        await log.ainfo("task_completed", task_id=task.id, source="chat")
        return OperationResult(success=True, task=task)

    async def _delete(self, op: DeleteOperation) -> OperationResult:
        if not op.task_id:
            return OperationResult()

        deleted = await delete_task(self._stores.conn, self._stores.task_store, op.task_id)
        if not deleted:
            raise TaskNotFoundError(op.task_id)

        await log.ainfo("task_deleted", task_id=op.task_id, source="chat")
        return OperationResult(success=True, deleted_task_id=op.task_id)

    async def _add_remark(self, op: AddRemarkOperation) -> OperationResult:
        if not (op.task_id and op.remarks):
            return OperationResult()

        if await self._stores.task_store.get_task(op.task_id) is None:
            raise TaskNotFoundError(op.task_id)

        activity = Activity(
            id=str(ULID()),
            task_id=op.task_id,
            type=ActivityType.COMMENT,
            description="Comment added via AI assistant",
            remarks=op.remarks,
            user_id=ActorId.AI_ASSISTANT.value,
            created_at=datetime.now(UTC),
        )
        await append_activity(self._stores.conn, self._stores.activity_store, activity)
        return OperationResult(success=True, activity=activity)

    async def _get_status(self, op: GetStatusOperation) -> OperationResult:
        if op.task_id:
            task = await self._stores.task_store.get_task(op.task_id)
            activities = await self._stores.activity_store.list_activities_for_task(op.task_id)
            return OperationResult(success=True, task=task, activities=activities)

        tasks = await self._stores.task_store.list_tasks()
        return OperationResult(success=True, stats=compute_stats(tasks), tasks=tasks)
