"""RSVP response service: submission, analytics and search."""
import logging
from typing import Any

from app.models import RSVPForm, RSVPResponse
from app.models.common import timestamp_ms
from app.services.qr import check_in_code
from app.storage import Collection, KeyValueStore, keys

logger = logging.getLogger(__name__)

# Attendance filter name -> stored attendance answer
ATTENDANCE_FILTERS = {
    "attending": "Yes",
    "maybe": "Maybe",
    "not-attending": "No",
}


def response_collection(store: KeyValueStore, event_id: str) -> Collection[RSVPResponse]:
    return Collection(store, keys.rsvp_responses(event_id), RSVPResponse)


def list_responses(store: KeyValueStore, event_id: str) -> list[RSVPResponse]:
    return response_collection(store, event_id).all()


def get_response(store: KeyValueStore, event_id: str, response_id: str) -> RSVPResponse | None:
    return response_collection(store, event_id).get(response_id)


def missing_required(form: RSVPForm, values: dict[str, Any]) -> list[str]:
    """Names of required fields that have no answer."""
    missing = []
    for f in form.fields:
        if not f.required:
            continue
        value = values.get(f.name)
        if value is None or value is False or value == []:
            missing.append(f.name)
        elif isinstance(value, str) and not value.strip():
            missing.append(f.name)
    return missing


def submit_response(
    store: KeyValueStore, form: RSVPForm, values: dict[str, Any]
) -> RSVPResponse:
    """
    Append a guest's answers to the form's event.

    The form must be active and every required field answered. The check-in
    code is derived from the submission time.
    """
    if not form.is_active:
        raise ValueError("This RSVP form is not accepting responses")

    missing = missing_required(form, values)
    if missing:
        raise ValueError(f"Missing required fields: {', '.join(missing)}")

    response = RSVPResponse(
        form_id=form.id,
        event_id=form.event_id,
        responses=values,
        qr_code=check_in_code(timestamp_ms()),
    )
    response_collection(store, form.event_id).append(response)
    logger.info(f"Recorded RSVP {response.id} for event {form.event_id}")
    return response


def attendance(response: RSVPResponse) -> str:
    return str(response.responses.get("attendance", ""))


def response_stats(responses: list[RSVPResponse]) -> dict:
    answers = [attendance(r) for r in responses]
    return {
        "total": len(responses),
        "attending": answers.count("Yes"),
        "maybe": answers.count("Maybe"),
        "not_attending": answers.count("No"),
        "demo": sum(1 for r in responses if r.is_demo),
    }


def matches_search(response: RSVPResponse, search: str, include_code: bool = False) -> bool:
    """Case-insensitive match of search against any answer (and the check-in code)."""
    term = search.lower()
    if any(term in str(value).lower() for value in response.responses.values()):
        return True
    return include_code and term in response.qr_code.lower()


def filter_responses(
    responses: list[RSVPResponse],
    search: str = "",
    status: str = "all",
    include_code: bool = False,
) -> list[RSVPResponse]:
    """
    Filter responses by free-text search and attendance.

    status is "all" or one of the keys of ATTENDANCE_FILTERS; an unknown
    status raises ValueError.
    """
    if status != "all" and status not in ATTENDANCE_FILTERS:
        raise ValueError(f"Unknown attendance filter: {status}")

    result = []
    for r in responses:
        if search and not matches_search(r, search, include_code):
            continue
        if status != "all" and attendance(r) != ATTENDANCE_FILTERS[status]:
            continue
        result.append(r)
    return result
