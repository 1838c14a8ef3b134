"""领域异常体系"""


class TaskPilotError(Exception):
    """TaskPilot 领域基础异常"""


class TaskNotFoundError(TaskPilotError):
    """引用的任务不存在"""

    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task with id {task_id} does not exist")
        self.task_id = task_id
