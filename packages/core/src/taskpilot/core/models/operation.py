"""TaskOperation / OperationResult -- 对话助手的结构化操作

TaskOperation 是以 action 为标签的封闭联合类型，每个 action 一个类。
模型给出的字段值除 JSON 解析外不做校验（统一为宽松字符串），
由执行器决定如何容忍缺失或不合理的取值。
未知 action 落入 UnknownOperation，保留原始 action 字符串。
"""

from typing import Any, Literal

from pydantic import Field, field_validator, model_serializer

from .activity import Activity
from .base import CamelModel
from .task import Task


class _OperationBase(CamelModel):
    """操作公共字段"""

    task_id: str | None = None
    title: str | None = None
    description: str | None = None
    status: str | None = None
    priority: str | None = None
    assigned_to: str | None = None
    due_date: str | None = None
    remarks: str | None = None

    @field_validator(
        "task_id",
        "title",
        "description",
        "status",
        "priority",
        "assigned_to",
        "due_date",
        "remarks",
        mode="before",
    )
    @classmethod
    def _stringify_scalars(cls, value: Any) -> Any:
        # 模型常把任务编号输出为数字
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class CreateOperation(_OperationBase):
    action: Literal["create"] = "create"


class UpdateOperation(_OperationBase):
    action: Literal["update"] = "update"


class CompleteOperation(_OperationBase):
    action: Literal["complete"] = "complete"


class DeleteOperation(_OperationBase):
    action: Literal["delete"] = "delete"


class AddRemarkOperation(_OperationBase):
    action: Literal["add_remark"] = "add_remark"


class GetStatusOperation(_OperationBase):
    action: Literal["get_status"] = "get_status"


class ListTasksOperation(_OperationBase):
    action: Literal["list_tasks"] = "list_tasks"


class UnknownOperation(_OperationBase):
    """模型返回了不在枚举内的 action（或缺少 action）"""

    action: str = ""


TaskOperation = (
    CreateOperation
    | UpdateOperation
    | CompleteOperation
    | DeleteOperation
    | AddRemarkOperation
    | GetStatusOperation
    | ListTasksOperation
    | UnknownOperation
)

_OPERATION_TYPES: dict[str, type[_OperationBase]] = {
    "create": CreateOperation,
    "update": UpdateOperation,
    "complete": CompleteOperation,
    "delete": DeleteOperation,
    "add_remark": AddRemarkOperation,
    "get_status": GetStatusOperation,
    "list_tasks": ListTasksOperation,
}

# 向模型声明的合法 action（顺序即提示词中的顺序）
KNOWN_ACTIONS: tuple[str, ...] = tuple(_OPERATION_TYPES)


def parse_operation(data: dict[str, Any]) -> TaskOperation:
    """按 action 标签把模型输出的字典解析为具体操作类型

    Raises:
        pydantic.ValidationError: 字段类型无法解析（如 title 为对象）
    """
    action = data.get("action")
    operation_cls = _OPERATION_TYPES.get(action) if isinstance(action, str) else None
    if operation_cls is None:
        payload = {**data, "action": action if isinstance(action, str) else ""}
        return UnknownOperation.model_validate(payload)
    return operation_cls.model_validate(data)


class TaskStats(CamelModel):
    """任务整体进度统计"""

    total: int = 0
    completed: int = 0
    in_progress: int = 0
    not_started: int = 0
    failed: int = 0


class OperationResult(CamelModel):
    """操作执行结果

    序列化时省略取值为 None 的顶层字段，仅 success 始终出现。
    """

    success: bool = Field(default=False)
    task: Task | None = None
    activity: Activity | None = None
    activities: list[Activity] | None = None
    tasks: list[Task] | None = None
    stats: TaskStats | None = None
    deleted_task_id: str | None = None
    error: str | None = None

    @model_serializer(mode="wrap")
    def _drop_absent(self, handler) -> dict[str, Any]:
        data = handler(self)
        return {key: value for key, value in data.items() if value is not None}

    @property
    def affected_task_id(self) -> str | None:
        """本次操作影响到的任务 ID（用于关联助手回复）"""
        if self.task is not None:
            return self.task.id
        if self.activity is not None:
            return self.activity.task_id
        return None
