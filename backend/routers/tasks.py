"""
Task management API endpoints.

Thin CRUD layer over the TaskStore. Every write returns the stored record
so the UI can refresh its local task list from the source of truth.
Planner errors raised by the store are turned into responses by the
handlers registered in backend.main.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from backend.dependencies import get_task_store
from backend.schemas import (
    ErrorResponse,
    SuccessResponse,
    TaskCreate,
    TaskResponse,
    TaskUpdate,
)
from taskplanner.core.models import Task, TaskPatch
from taskplanner.core.task_store import TaskStore

router = APIRouter(
    prefix="/tasks",
    tags=["tasks"],
    responses={
        400: {"model": ErrorResponse, "description": "Invalid task field"},
        404: {"model": ErrorResponse, "description": "Task not found"},
    },
)


def _task_to_response(task: Task) -> TaskResponse:
    """Convert Task model to TaskResponse schema."""
    return TaskResponse(**task.to_dict())


@router.get("", response_model=List[TaskResponse])
async def list_tasks(
    status: Optional[str] = Query(None, description="Filter by completion: open or completed"),
    store: TaskStore = Depends(get_task_store),
):
    """
    List tasks, optionally only open or only completed ones.

    Ordered by date (unscheduled first), then position, then creation time.
    """
    return [_task_to_response(t) for t in store.list_all(status=status)]


@router.get("/pool", response_model=List[TaskResponse])
async def list_pool(store: TaskStore = Depends(get_task_store)):
    """List open unscheduled tasks (the task pool)."""
    return [_task_to_response(t) for t in store.list_unscheduled()]


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(task_id: int, store: TaskStore = Depends(get_task_store)):
    """Get a single task by ID."""
    return _task_to_response(store.get(task_id))


@router.post("", response_model=TaskResponse, status_code=201)
async def create_task(task: TaskCreate, store: TaskStore = Depends(get_task_store)):
    """
    Create a new task.

    Omitted fields get their defaults; omit ``date`` to put the task in
    the pool.
    """
    data = task.model_dump(exclude_none=True)
    return _task_to_response(store.create(data))


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: int,
    task: TaskUpdate,
    store: TaskStore = Depends(get_task_store),
):
    """Update an existing task. Only fields present in the body change."""
    patch = TaskPatch.from_dict(task.model_dump(exclude_unset=True))
    return _task_to_response(store.update(task_id, patch))


@router.patch("/{task_id}", response_model=TaskResponse)
async def patch_task(
    task_id: int,
    task: TaskUpdate,
    store: TaskStore = Depends(get_task_store),
):
    """Partially update an existing task (same semantics as PUT)."""
    patch = TaskPatch.from_dict(task.model_dump(exclude_unset=True))
    return _task_to_response(store.update(task_id, patch))


@router.delete("/{task_id}", response_model=SuccessResponse)
async def delete_task(task_id: int, store: TaskStore = Depends(get_task_store)):
    """Delete a task."""
    store.delete(task_id)
    return SuccessResponse(success=True)
