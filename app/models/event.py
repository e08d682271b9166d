"""Event model for organizer-created events.

Events are the root of every other collection: tasks, notes, resources,
files, the RSVP form and RSVP responses are all stored under keys
namespaced by the owning event's id.
"""

from datetime import datetime

from sqlmodel import Field, SQLModel

from app.models.common import new_id, utcnow


class EventCreate(SQLModel):
    """Fields an organizer supplies when creating an event."""
    name: str = Field(min_length=1)
    description: str = ""
    date: str
    time: str = ""
    venue: str = ""


class Event(EventCreate):
    """An event created from the dashboard.

    Attributes:
        id: Timestamp-based identifier.
        name: Event title.
        description: Free text shown on the event page.
        date: Calendar date as entered (ISO ``YYYY-MM-DD``).
        time: Start time as entered (``HH:MM``), may be empty.
        venue: Where the event takes place.
        created_at: When the event was created.
        owner_id: Id of the organizer who created it.
    """
    id: str = Field(default_factory=new_id)
    created_at: datetime = Field(default_factory=utcnow)
    owner_id: str = ""
