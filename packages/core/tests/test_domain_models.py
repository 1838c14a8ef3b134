"""Domain Model 单元测试

测试内容：
1. camelCase 序列化与双向输入
2. TaskCreate / TaskUpdate 请求体校验
3. parse_operation 按 action 分派
4. OperationResult 省略空字段
"""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError
from taskpilot.core.models import (
    KNOWN_ACTIONS,
    Activity,
    ActivityType,
    CreateOperation,
    GetStatusOperation,
    OperationResult,
    Task,
    TaskCreate,
    TaskPriority,
    TaskStats,
    TaskStatus,
    TaskUpdate,
    UnknownOperation,
    UpdateOperation,
    parse_operation,
)


def _make_task(**overrides) -> Task:
    now = datetime(2024, 2, 1, 9, 0, tzinfo=UTC)
    fields = {
        "id": "01JTASK0000000000000000001",
        "title": "Finalize two Malls",
        "created_at": now,
        "updated_at": now,
    }
    fields.update(overrides)
    return Task(**fields)


class TestTaskModel:
    """Task / TaskCreate / TaskUpdate"""

    def test_defaults(self):
        task = _make_task()
        assert task.status == TaskStatus.NOT_STARTED
        assert task.priority == TaskPriority.MEDIUM
        assert task.dependencies is None

    def test_serializes_camel_case(self):
        """JSON 使用 camelCase 键"""
        data = _make_task(assigned_to="Banking Team").model_dump(mode="json", by_alias=True)
        assert data["assignedTo"] == "Banking Team"
        assert "createdAt" in data
        assert "updatedAt" in data
        assert "assigned_to" not in data

    def test_accepts_both_names(self):
        a = TaskCreate.model_validate({"title": "x", "assignedTo": "Ops"})
        b = TaskCreate.model_validate({"title": "x", "assigned_to": "Ops"})
        assert a.assigned_to == b.assigned_to == "Ops"

    def test_create_requires_title(self):
        with pytest.raises(ValidationError):
            TaskCreate.model_validate({"description": "no title"})
        with pytest.raises(ValidationError):
            TaskCreate.model_validate({"title": ""})

    def test_create_rejects_unknown_status(self):
        with pytest.raises(ValidationError):
            TaskCreate.model_validate({"title": "x", "status": "blocked"})

    def test_create_ignores_dependencies(self):
        payload = TaskCreate.model_validate({"title": "x", "dependencies": ["a"]})
        assert "dependencies" not in payload.model_dump()

    def test_naive_due_date_becomes_utc(self):
        create = TaskCreate.model_validate({"title": "x", "dueDate": "2024-02-01T00:00:00"})
        update = TaskUpdate.model_validate({"dueDate": "2024-02-01T05:30:00+05:30"})
        assert create.due_date == datetime(2024, 2, 1, tzinfo=UTC)
        assert update.due_date == datetime(2024, 2, 1, tzinfo=UTC)
        assert update.due_date.tzinfo == UTC

    def test_update_only_sent_fields(self):
        """只返回请求中出现的字段"""
        update = TaskUpdate.model_validate({"status": "in_progress", "assignedTo": None})
        assert update.to_updates() == {
            "status": TaskStatus.IN_PROGRESS,
            "assigned_to": None,
        }

    def test_update_rejects_null_title(self):
        with pytest.raises(ValidationError):
            TaskUpdate.model_validate({"title": None})


class TestParseOperation:
    """parse_operation 按 action 分派"""

    def test_known_actions(self):
        assert KNOWN_ACTIONS == (
            "create",
            "update",
            "complete",
            "delete",
            "add_remark",
            "get_status",
            "list_tasks",
        )

    def test_create(self):
        op = parse_operation(
            {"action": "create", "title": "Mall Partnership", "priority": "high"}
        )
        assert isinstance(op, CreateOperation)
        assert op.title == "Mall Partnership"
        assert op.priority == "high"

    def test_camel_case_fields(self):
        op = parse_operation(
            {"action": "update", "taskId": "abc", "assignedTo": "Ops", "dueDate": "2024-03-01"}
        )
        assert isinstance(op, UpdateOperation)
        assert op.task_id == "abc"
        assert op.assigned_to == "Ops"
        assert op.due_date == "2024-03-01"

    def test_numeric_task_id_becomes_string(self):
        op = parse_operation({"action": "get_status", "taskId": 3})
        assert isinstance(op, GetStatusOperation)
        assert op.task_id == "3"

    def test_unknown_action_kept(self):
        op = parse_operation({"action": "archive", "taskId": "abc"})
        assert isinstance(op, UnknownOperation)
        assert op.action == "archive"
        assert op.task_id == "abc"

    def test_missing_action(self):
        op = parse_operation({"title": "x"})
        assert isinstance(op, UnknownOperation)
        assert op.action == ""

    def test_invalid_field_type_raises(self):
        with pytest.raises(ValidationError):
            parse_operation({"action": "create", "title": {"nested": True}})


class TestOperationResult:
    """OperationResult 序列化"""

    def test_default_is_failure(self):
        assert OperationResult().model_dump(by_alias=True) == {"success": False}

    def test_omits_absent_fields(self):
        result = OperationResult(success=True, deleted_task_id="abc")
        assert result.model_dump(by_alias=True) == {"success": True, "deletedTaskId": "abc"}

    def test_stats_camel_case(self):
        result = OperationResult(success=True, stats=TaskStats(total=2, in_progress=1, failed=1))
        data = result.model_dump(mode="json", by_alias=True)
        assert data["stats"] == {
            "total": 2,
            "completed": 0,
            "inProgress": 1,
            "notStarted": 0,
            "failed": 1,
        }

    def test_affected_task_id(self):
        task = _make_task()
        activity = Activity(
            id="01JACT00000000000000000001",
            task_id="01JTASK0000000000000000009",
            type=ActivityType.COMMENT,
            description="Comment added",
            created_at=task.created_at,
        )
        assert OperationResult(success=True, task=task).affected_task_id == task.id
        assert (
            OperationResult(success=True, activity=activity).affected_task_id
            == "01JTASK0000000000000000009"
        )
        assert OperationResult(success=True, tasks=[task]).affected_task_id is None
