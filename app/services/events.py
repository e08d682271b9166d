"""Event service: the global event list and cascade deletion."""
import logging

from app.models import Event, EventCreate
from app.storage import Collection, KeyValueStore, keys

logger = logging.getLogger(__name__)


def event_collection(store: KeyValueStore) -> Collection[Event]:
    return Collection(store, keys.EVENTS, Event)


def list_events(store: KeyValueStore) -> list[Event]:
    return event_collection(store).all()


def get_event(store: KeyValueStore, event_id: str) -> Event | None:
    return event_collection(store).get(event_id)


def create_event(store: KeyValueStore, data: EventCreate, owner_id: str) -> Event:
    """Create an event owned by owner_id and append it to the event list."""
    name = data.name.strip()
    if not name:
        raise ValueError("Event name must not be empty")

    event = Event(
        name=name,
        description=data.description.strip(),
        date=data.date,
        time=data.time,
        venue=data.venue.strip(),
        owner_id=owner_id,
    )
    event_collection(store).append(event)
    logger.info(f"Created event {event.id} ({event.name})")
    return event


def delete_event(store: KeyValueStore, event_id: str) -> bool:
    """
    Delete an event together with everything stored for it.

    Tasks, notes, resources, file records, the RSVP form and RSVP responses
    are all removed. Returns False if the event does not exist.
    """
    if not event_collection(store).remove(event_id):
        return False

    for key in keys.for_event(event_id):
        store.remove(key)

    logger.info(f"Deleted event {event_id} and its collections")
    return True
