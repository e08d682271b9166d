"""Task model for per-event checklists."""

from datetime import datetime

from sqlmodel import Field, SQLModel

from app.models.common import new_id, utcnow


class Task(SQLModel):
    """A checklist task belonging to one event.

    Attributes:
        id: Timestamp-based identifier.
        event_id: Owning event.
        title: Display text, never empty.
        completed: Whether the task has been checked off.
        created_at: When the task was added.
    """
    id: str = Field(default_factory=new_id)
    event_id: str
    title: str
    completed: bool = False
    created_at: datetime = Field(default_factory=utcnow)


class TaskCreate(SQLModel):
    title: str


class TaskUpdate(SQLModel):
    title: str | None = None
    completed: bool | None = None
