from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from ..schemas import StatsOut, TaskCreate, TaskOut, ViewModelOut
from ..service import TodoService
from . import get_service

router = APIRouter(
    prefix="/api/v1/tasks",
    tags=["tasks"],
)


# PUBLIC_INTERFACE
@router.get(
    "/",
    response_model=ViewModelOut,
    summary="List view",
    description=(
        "Return the list view for the current filter criteria.\n\n"
        "Rows are ordered pending first, then by priority (high to low), then by "
        "earliest due date. Statistics always cover every task, not just the "
        "filtered rows."
    ),
)
def get_view(service: TodoService = Depends(get_service)) -> ViewModelOut:
    """
    Build the view model from the current store and criteria.
    """
    return ViewModelOut.model_validate(asdict(service.view()))


# PUBLIC_INTERFACE
@router.post(
    "/",
    response_model=TaskOut,
    status_code=status.HTTP_201_CREATED,
    summary="Add Task",
    description="Validate and add a new task. Name and date errors are reported together.",
    responses={
        201: {"description": "Task created successfully"},
        422: {"description": "Validation error"},
    },
)
def submit_task(payload: TaskCreate, service: TodoService = Depends(get_service)) -> TaskOut:
    """
    Submit a new task.
    """
    created = service.submit_new_task(payload.name, payload.due_date, payload.priority)
    return TaskOut(**created)


# PUBLIC_INTERFACE
@router.get(
    "/export",
    summary="Export Tasks",
    description="Download every task as a pretty-printed JSON array named todos_<date>.json.",
    response_class=Response,
    responses={200: {"content": {"application/json": {}}}},
)
def export_tasks(service: TodoService = Depends(get_service)) -> Response:
    return Response(
        content=service.export_all(),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{service.export_filename()}"'},
    )


# PUBLIC_INTERFACE
@router.get("/stats", response_model=StatsOut, summary="Task Statistics")
def get_stats(service: TodoService = Depends(get_service)) -> StatsOut:
    """
    Total, completed and pending counts across all tasks.
    """
    return StatsOut(**asdict(service.stats()))


# PUBLIC_INTERFACE
@router.get(
    "/{task_id}",
    response_model=TaskOut,
    summary="Get Task",
    responses={
        200: {"description": "Task found"},
        404: {"description": "Task not found"},
    },
)
def get_task(task_id: int, service: TodoService = Depends(get_service)) -> TaskOut:
    return TaskOut(**service.get_task(task_id))


# PUBLIC_INTERFACE
@router.post(
    "/{task_id}/toggle",
    response_model=TaskOut,
    summary="Toggle Task",
    description="Mark a pending task completed, or a completed task pending again.",
    responses={
        200: {"description": "Task updated"},
        404: {"description": "Task not found"},
    },
)
def toggle_task(task_id: int, service: TodoService = Depends(get_service)) -> TaskOut:
    return TaskOut(**service.toggle_task(task_id))


# PUBLIC_INTERFACE
@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Task",
    description="Delete a task by ID. The client must confirm with the user and pass confirm=true.",
    responses={
        204: {"description": "Task deleted"},
        400: {"description": "Deletion not confirmed"},
        404: {"description": "Task not found"},
    },
)
def delete_task(
    task_id: int,
    confirm: bool = Query(False, description="Set once the user has confirmed the deletion"),
    service: TodoService = Depends(get_service),
) -> None:
    """
    Delete a task. Returns 204 on success, 400 without confirmation, 404 if not found.
    """
    if not confirm:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Deletion must be confirmed")
    service.delete_task(task_id)
    return None
