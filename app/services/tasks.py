"""Task checklist service."""
import logging

from app.models import Task
from app.storage import Collection, KeyValueStore, keys

logger = logging.getLogger(__name__)


def task_collection(store: KeyValueStore, event_id: str) -> Collection[Task]:
    return Collection(store, keys.tasks(event_id), Task)


def list_tasks(store: KeyValueStore, event_id: str) -> list[Task]:
    return task_collection(store, event_id).all()


def _clean_title(title: str) -> str:
    title = title.strip()
    if not title:
        raise ValueError("Task title must not be empty")
    return title


def create_task(store: KeyValueStore, event_id: str, title: str) -> Task:
    task = Task(event_id=event_id, title=_clean_title(title))
    return task_collection(store, event_id).append(task)


def update_task(
    store: KeyValueStore,
    event_id: str,
    task_id: str,
    title: str | None = None,
    completed: bool | None = None,
) -> Task | None:
    """Rename and/or check a task. Returns None if the task does not exist."""
    if title is not None:
        title = _clean_title(title)

    def change(task: Task) -> None:
        if title is not None:
            task.title = title
        if completed is not None:
            task.completed = completed

    return task_collection(store, event_id).update(task_id, change)


def toggle_task(store: KeyValueStore, event_id: str, task_id: str) -> Task | None:
    def change(task: Task) -> None:
        task.completed = not task.completed

    return task_collection(store, event_id).update(task_id, change)


def delete_task(store: KeyValueStore, event_id: str, task_id: str) -> bool:
    return task_collection(store, event_id).remove(task_id)


def task_progress(tasks: list[Task]) -> dict:
    """Completed and total counts for a checklist."""
    completed = sum(1 for t in tasks if t.completed)
    return {
        "completed_count": completed,
        "total_count": len(tasks),
        "all_completed": bool(tasks) and completed == len(tasks),
    }
