"""活动日志路由

GET  /api/tasks/{task_id}/activities  任务的活动日志（最新在前）
POST /api/tasks/{task_id}/activities  追加活动（201），任务不存在时 404
"""

from fastapi import APIRouter, Depends
from taskpilot.core.exceptions import TaskNotFoundError
from taskpilot.core.models import Activity, ActivityCreate

from ..deps import get_task_service
from ..services.task_service import TaskService

router = APIRouter()


@router.get("/api/tasks/{task_id}/activities", response_model=list[Activity])
async def list_activities(task_id: str, service: TaskService = Depends(get_task_service)):
    return await service.list_activities(task_id)


@router.post(
    "/api/tasks/{task_id}/activities",
    response_model=Activity,
    status_code=201,
)
async def create_activity(
    task_id: str,
    body: ActivityCreate,
    service: TaskService = Depends(get_task_service),
):
    activity = await service.add_activity(task_id, body)
    if activity is None:
        raise TaskNotFoundError(task_id)
    return activity
