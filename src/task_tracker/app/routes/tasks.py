from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query, Request

from task_tracker.domain.validation import PRIORITY_VALUES, STATUS_VALUES
from task_tracker.services.task_service import TaskService

router = APIRouter(prefix="/api", tags=["tasks"])


def get_service(request: Request) -> TaskService:
    # Set by the lifespan in main.py once the store is open.
    svc = getattr(request.app.state, "task_service", None)
    if svc is None:
        raise RuntimeError("TaskService not wired")
    return svc


def _as_payload(body: Any) -> dict:
    return body if isinstance(body, dict) else {}


@router.get("/tasks")
async def list_tasks(
    status: Optional[str] = None,
    priority: Optional[str] = None,
    sort_by: str = Query("createdAt", alias="sortBy"),
    order: str = "desc",
    svc: TaskService = Depends(get_service),
):
    page = await svc.list(status=status, priority=priority, sort_by=sort_by, order=order)
    return {"success": True, "data": [t.to_public() for t in page.items], "count": page.count}


@router.get("/tasks/count")
async def count_tasks(
    status: Optional[str] = None,
    priority: Optional[str] = None,
    svc: TaskService = Depends(get_service),
):
    return {"success": True, "data": {"count": await svc.count(status=status, priority=priority)}}


@router.get("/tasks/{task_id}")
async def get_task(task_id: str, svc: TaskService = Depends(get_service)):
    task = await svc.get(task_id)
    return {"success": True, "data": task.to_public()}


@router.post("/tasks", status_code=201)
async def create_task(body: Any = Body(default=None), svc: TaskService = Depends(get_service)):
    task = await svc.create(_as_payload(body))
    return {"success": True, "data": task.to_public(), "message": "Task created successfully"}


@router.put("/tasks/{task_id}")
async def update_task(task_id: str, body: Any = Body(default=None), svc: TaskService = Depends(get_service)):
    task = await svc.update(task_id, _as_payload(body))
    return {"success": True, "data": task.to_public(), "message": "Task updated successfully"}


@router.delete("/tasks/{task_id}")
async def delete_task(task_id: str, svc: TaskService = Depends(get_service)):
    task = await svc.remove(task_id)
    return {"success": True, "data": task.to_public(), "message": "Task deleted successfully"}


@router.get("/stats")
async def task_stats(svc: TaskService = Depends(get_service)):
    stats = await svc.stats()
    return {"success": True, "data": stats.to_public()}


@router.get("/meta/enums")
def task_enums():
    return {"success": True, "data": {"priority": PRIORITY_VALUES, "status": STATUS_VALUES}}
