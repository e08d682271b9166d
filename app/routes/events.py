"""Event routes for listing, creating and deleting events."""
from fastapi import APIRouter, Depends, HTTPException

from app.core.config import settings
from app.models import Event, EventCreate
from app.routes.deps import get_event_or_404, get_store, require_login
from app.services import events as event_service
from app.services.files import list_files
from app.services.resources import list_resources, total_quantity
from app.services.rsvp_forms import get_form
from app.services.rsvp_responses import list_responses
from app.services.tasks import list_tasks, task_progress
from app.storage import KeyValueStore

router = APIRouter(prefix="/events", tags=["events"], dependencies=[Depends(require_login)])


@router.get("")
async def list_events(store: KeyValueStore = Depends(get_store)) -> list[Event]:
    """All events in creation order."""
    return event_service.list_events(store)


@router.post("", status_code=201)
async def create_event(body: EventCreate, store: KeyValueStore = Depends(get_store)) -> Event:
    """Create an event owned by the logged-in organizer."""
    try:
        return event_service.create_event(store, body, owner_id=settings.admin_user_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{event_id}")
async def event_detail(
    event: Event = Depends(get_event_or_404),
    store: KeyValueStore = Depends(get_store),
):
    """
    Display single event with a summary of its collections.

    The summary reads stored data only; it never seeds demo responses.
    """
    tasks = list_tasks(store, event.id)
    resources = list_resources(store, event.id)
    form = get_form(store, event.id)
    return {
        "event": event,
        "tasks": task_progress(tasks),
        "resource_total": total_quantity(resources),
        "file_count": len(list_files(store, event.id)),
        "has_rsvp_form": form is not None,
        "response_count": len(list_responses(store, event.id)),
    }


@router.delete("/{event_id}")
async def delete_event(event_id: str, store: KeyValueStore = Depends(get_store)):
    """Delete an event and every collection stored for it."""
    if not event_service.delete_event(store, event_id):
        raise HTTPException(status_code=404, detail="Event not found")
    return {"success": True, "event_id": event_id}
