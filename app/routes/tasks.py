"""Task routes for managing an event's checklist."""
from fastapi import APIRouter, Depends, HTTPException

from app.models import Event, Task, TaskCreate, TaskUpdate
from app.routes.deps import get_event_or_404, get_store, require_login
from app.services import tasks as task_service
from app.storage import KeyValueStore

router = APIRouter(
    prefix="/events/{event_id}/tasks",
    tags=["tasks"],
    dependencies=[Depends(require_login)],
)


@router.get("")
async def list_tasks(
    event: Event = Depends(get_event_or_404),
    store: KeyValueStore = Depends(get_store),
):
    """Tasks in insertion order with completion counts."""
    tasks = task_service.list_tasks(store, event.id)
    return {"tasks": tasks, **task_service.task_progress(tasks)}


@router.post("", status_code=201)
async def create_task(
    body: TaskCreate,
    event: Event = Depends(get_event_or_404),
    store: KeyValueStore = Depends(get_store),
) -> Task:
    """Add a task. The title is trimmed and must not be empty."""
    try:
        return task_service.create_task(store, event.id, body.title)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/{task_id}")
async def update_task(
    task_id: str,
    body: TaskUpdate,
    event: Event = Depends(get_event_or_404),
    store: KeyValueStore = Depends(get_store),
) -> Task:
    """Rename a task and/or set its completed flag."""
    try:
        task = task_service.update_task(
            store, event.id, task_id, title=body.title, completed=body.completed
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@router.post("/{task_id}/toggle")
async def toggle_task(
    task_id: str,
    event: Event = Depends(get_event_or_404),
    store: KeyValueStore = Depends(get_store),
):
    """
    Toggle task completed state.

    Returns the new state together with the updated checklist counts.
    """
    task = task_service.toggle_task(store, event.id, task_id)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found")

    progress = task_service.task_progress(task_service.list_tasks(store, event.id))
    return {"success": True, "task_id": task_id, "completed": task.completed, **progress}


@router.delete("/{task_id}")
async def delete_task(
    task_id: str,
    event: Event = Depends(get_event_or_404),
    store: KeyValueStore = Depends(get_store),
):
    """Remove a single task from the checklist."""
    if not task_service.delete_task(store, event.id, task_id):
        raise HTTPException(status_code=404, detail="Task not found")
    return {"success": True, "task_id": task_id}
