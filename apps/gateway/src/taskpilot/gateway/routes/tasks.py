"""任务路由

GET    /api/tasks            任务列表（created_at 正序）
GET    /api/tasks/{task_id}  任务详情
POST   /api/tasks            创建任务（201）
PATCH  /api/tasks/{task_id}  局部更新
DELETE /api/tasks/{task_id}  删除任务（204），活动日志保留
"""

from fastapi import APIRouter, Depends
from starlette.responses import Response
from taskpilot.core.exceptions import TaskNotFoundError
from taskpilot.core.models import Task, TaskCreate, TaskUpdate

from ..deps import get_task_service
from ..services.task_service import TaskService

router = APIRouter()


@router.get("/api/tasks", response_model=list[Task])
async def list_tasks(service: TaskService = Depends(get_task_service)):
    return await service.list_tasks()


@router.get("/api/tasks/{task_id}", response_model=Task)
async def get_task(task_id: str, service: TaskService = Depends(get_task_service)):
    task = await service.get_task(task_id)
    if task is None:
        raise TaskNotFoundError(task_id)
    return task


@router.post("/api/tasks", response_model=Task, status_code=201)
async def create_task(body: TaskCreate, service: TaskService = Depends(get_task_service)):
    """创建任务，同时写入 created 活动"""
    return await service.create_task(body)


@router.patch("/api/tasks/{task_id}", response_model=Task)
async def update_task(
    task_id: str,
    body: TaskUpdate,
    service: TaskService = Depends(get_task_service),
):
    """只应用请求体中出现的字段；任务不存在时 404 且不写活动"""
    task = await service.update_task(task_id, body)
    if task is None:
        raise TaskNotFoundError(task_id)
    return task


@router.delete("/api/tasks/{task_id}", status_code=204)
async def delete_task(task_id: str, service: TaskService = Depends(get_task_service)):
    if not await service.delete_task(task_id):
        raise TaskNotFoundError(task_id)
    return Response(status_code=204)
