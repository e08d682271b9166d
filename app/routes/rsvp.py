"""RSVP routes for the form builder, response analytics and check-in codes."""
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse, Response

from app.core.config import settings
from app.models import (
    Event,
    RSVPField,
    RSVPFieldCreate,
    RSVPFieldUpdate,
    RSVPForm,
    RSVPFormUpdate,
    RSVPResponse,
)
from app.routes.deps import get_event_or_404, get_store, require_login
from app.services import rsvp_forms as form_service
from app.services import rsvp_responses as response_service
from app.services.auth import get_state
from app.services.demo import seed_demo_responses
from app.services.export import export_csv, export_filename
from app.services.mail import mailto_link
from app.services.qr import qr_svg
from app.storage import KeyValueStore

router = APIRouter(
    prefix="/events/{event_id}/rsvp",
    tags=["rsvp"],
    dependencies=[Depends(require_login)],
)


def load_responses(store: KeyValueStore, event_id: str) -> list[RSVPResponse]:
    """Responses for the event, seeding demo guests on first view when enabled."""
    if settings.seed_demo_data:
        seed_demo_responses(store, event_id)
    return response_service.list_responses(store, event_id)


def _form_or_404(store: KeyValueStore, event_id: str) -> RSVPForm:
    form = form_service.get_form(store, event_id)
    if not form:
        raise HTTPException(status_code=404, detail="RSVP form not found")
    return form


def _response_or_404(store: KeyValueStore, event_id: str, response_id: str) -> RSVPResponse:
    response = response_service.get_response(store, event_id, response_id)
    if not response:
        raise HTTPException(status_code=404, detail="RSVP response not found")
    return response


# -------- Form builder --------

@router.get("/form")
async def get_form(
    event: Event = Depends(get_event_or_404),
    store: KeyValueStore = Depends(get_store),
) -> RSVPForm:
    return _form_or_404(store, event.id)


@router.post("/form", status_code=201)
async def create_form(
    event: Event = Depends(get_event_or_404),
    store: KeyValueStore = Depends(get_store),
) -> RSVPForm:
    """
    Create the event's RSVP form.

    New forms start with required name and email fields and are active.
    If the event already has a form it is returned unchanged.
    """
    return form_service.create_form(store, event.id)


@router.patch("/form")
async def update_form(
    body: RSVPFormUpdate,
    event: Event = Depends(get_event_or_404),
    store: KeyValueStore = Depends(get_store),
) -> RSVPForm:
    """Change the thank-you message or open/close the form."""
    form = form_service.update_form(
        store, event.id,
        thank_you_message=body.thank_you_message, is_active=body.is_active,
    )
    if not form:
        raise HTTPException(status_code=404, detail="RSVP form not found")
    return form


@router.post("/form/fields", status_code=201)
async def add_field(
    body: RSVPFieldCreate,
    event: Event = Depends(get_event_or_404),
    store: KeyValueStore = Depends(get_store),
) -> RSVPField:
    try:
        field = form_service.add_field(store, event.id, body)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not field:
        raise HTTPException(status_code=404, detail="RSVP form not found")
    return field


@router.patch("/form/fields/{field_id}")
async def update_field(
    field_id: str,
    body: RSVPFieldUpdate,
    event: Event = Depends(get_event_or_404),
    store: KeyValueStore = Depends(get_store),
) -> RSVPField:
    try:
        field = form_service.update_field(store, event.id, field_id, body)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not field:
        raise HTTPException(status_code=404, detail="Field not found")
    return field


@router.delete("/form/fields/{field_id}")
async def remove_field(
    field_id: str,
    event: Event = Depends(get_event_or_404),
    store: KeyValueStore = Depends(get_store),
):
    if not form_service.remove_field(store, event.id, field_id):
        raise HTTPException(status_code=404, detail="Field not found")
    return {"success": True, "field_id": field_id}


@router.get("/form/link")
async def share_link(event: Event = Depends(get_event_or_404)):
    """Public link guests use to respond."""
    return {"url": form_service.share_link(event.id)}


# -------- Responses and analytics --------

@router.get("/responses")
async def list_responses(
    search: str = "",
    status: str = Query("all", description="all, attending, maybe or not-attending"),
    event: Event = Depends(get_event_or_404),
    store: KeyValueStore = Depends(get_store),
):
    """Responses matching the search text and attendance filter."""
    responses = load_responses(store, event.id)
    try:
        filtered = response_service.filter_responses(responses, search, status)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"responses": filtered, "count": len(filtered), "total": len(responses)}


@router.get("/stats")
async def response_stats(
    event: Event = Depends(get_event_or_404),
    store: KeyValueStore = Depends(get_store),
):
    """Attendance counts across all responses."""
    return response_service.response_stats(load_responses(store, event.id))


@router.get("/export.csv")
async def export_responses(
    event: Event = Depends(get_event_or_404),
    store: KeyValueStore = Depends(get_store),
):
    """Download responses as CSV. Answers 404 when there is nothing to export."""
    responses = load_responses(store, event.id)
    if not responses:
        raise HTTPException(status_code=404, detail="No responses to export")
    return PlainTextResponse(
        export_csv(responses),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{export_filename(event.id)}"'},
    )


# -------- Check-in codes --------

@router.get("/qr-codes")
async def list_qr_codes(
    search: str = "",
    event: Event = Depends(get_event_or_404),
    store: KeyValueStore = Depends(get_store),
):
    """Guests with their check-in codes; search also matches the code itself."""
    responses = response_service.filter_responses(
        load_responses(store, event.id), search, include_code=True
    )
    return {
        "event": event,
        "codes": [
            {
                "response_id": r.id,
                "name": r.responses.get("name", "Guest"),
                "email": r.responses.get("email", ""),
                "qr_code": r.qr_code,
                "submitted_at": r.submitted_at,
                "is_demo": r.is_demo,
            }
            for r in responses
        ],
    }


@router.get("/responses/{response_id}/qr.svg")
async def qr_code_image(
    response_id: str,
    event: Event = Depends(get_event_or_404),
    store: KeyValueStore = Depends(get_store),
):
    """Cosmetic grid for a guest's check-in code, drawn in the current theme."""
    response = _response_or_404(store, event.id, response_id)
    dark = get_state(store.session).dark_mode
    return Response(qr_svg(response.qr_code, dark=dark), media_type="image/svg+xml")


@router.get("/responses/{response_id}/mailto")
async def qr_code_email(
    response_id: str,
    event: Event = Depends(get_event_or_404),
    store: KeyValueStore = Depends(get_store),
):
    """Mail link with the guest's event details and check-in code."""
    response = _response_or_404(store, event.id, response_id)
    return {"mailto": mailto_link(response, event)}
