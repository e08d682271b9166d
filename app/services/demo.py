"""Sample RSVP responses for events that have none yet.

Seeded records are tagged with ``is_demo`` so they can be told apart from
real submissions.
"""
import logging
from datetime import timedelta

from app.models import RSVPResponse
from app.models.common import utcnow
from app.services.rsvp_responses import response_collection
from app.storage import KeyValueStore

logger = logging.getLogger(__name__)

DEMO_GUESTS = [
    {
        "name": "John Smith",
        "email": "john@example.com",
        "phone": "+1-555-0123",
        "attendance": "Yes",
        "dietary": "Vegetarian",
        "guests": "2",
    },
    {
        "name": "Sarah Johnson",
        "email": "sarah@example.com",
        "phone": "+1-555-0124",
        "attendance": "Yes",
        "dietary": "None",
        "guests": "1",
    },
    {
        "name": "Mike Davis",
        "email": "mike@example.com",
        "phone": "+1-555-0125",
        "attendance": "Maybe",
        "dietary": "Gluten-free",
        "guests": "3",
    },
    {
        "name": "Emily Wilson",
        "email": "emily@example.com",
        "phone": "+1-555-0126",
        "attendance": "No",
    },
]


def demo_responses(event_id: str) -> list[RSVPResponse]:
    """Build the sample guests, submitted one to four days ago."""
    now = utcnow()
    return [
        RSVPResponse(
            id=str(i),
            form_id="demo",
            event_id=event_id,
            responses=dict(guest),
            submitted_at=now - timedelta(days=i),
            qr_code=f"QR{123455 + i}",
            is_demo=True,
        )
        for i, guest in enumerate(DEMO_GUESTS, start=1)
    ]


def seed_demo_responses(store: KeyValueStore, event_id: str) -> bool:
    """
    Store sample responses if the event has never stored any.

    Any stored value, including an empty list, counts as existing data, so
    seeding happens at most once per event. Returns True if it seeded.
    """
    collection = response_collection(store, event_id)
    if collection.exists():
        return False

    collection.replace_all(demo_responses(event_id))
    logger.info(f"Seeded {len(DEMO_GUESTS)} demo RSVP responses for event {event_id}")
    return True
