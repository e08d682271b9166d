"""Public RSVP routes. No login is required; anyone with the link may respond."""
import asyncio

from fastapi import APIRouter, Depends, HTTPException

from app.core.config import settings
from app.models import Event, RSVPSubmission
from app.routes.deps import get_store
from app.services.events import get_event
from app.services.rsvp_forms import get_form
from app.services.rsvp_responses import submit_response
from app.storage import KeyValueStore

router = APIRouter(prefix="/rsvp", tags=["public"])


def _event_and_form(store: KeyValueStore, event_id: str):
    event: Event | None = get_event(store, event_id)
    form = get_form(store, event_id)
    if not event or not form or not form.is_active:
        raise HTTPException(
            status_code=404, detail="This event doesn't have an active RSVP form."
        )
    return event, form


@router.get("/{event_id}")
async def rsvp_form(event_id: str, store: KeyValueStore = Depends(get_store)):
    """Event details and the fields guests need to fill in."""
    event, form = _event_and_form(store, event_id)
    return {
        "event": {
            "name": event.name,
            "description": event.description,
            "date": event.date,
            "time": event.time,
            "venue": event.venue,
        },
        "form": {"id": form.id, "fields": form.fields},
    }


@router.post("/{event_id}", status_code=201)
async def submit_rsvp(
    event_id: str,
    body: RSVPSubmission,
    store: KeyValueStore = Depends(get_store),
):
    """
    Submit a guest's answers.

    The response is appended to the event's responses after a short fixed
    delay. The guest gets the form's thank-you message and a check-in code.
    """
    _, form = _event_and_form(store, event_id)
    if settings.rsvp_submit_delay_seconds > 0:
        await asyncio.sleep(settings.rsvp_submit_delay_seconds)

    try:
        response = submit_response(store, form, body.responses)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "id": response.id,
        "qr_code": response.qr_code,
        "thank_you_message": form.thank_you_message,
    }
