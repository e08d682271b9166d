"""Compose check-in emails as ``mailto:`` links.

Delivery is left to the organizer's mail client.
"""
from datetime import date
from urllib.parse import quote

from app.models import Event, RSVPResponse

BODY_TEMPLATE = """Hi {guest},

Thank you for your RSVP! Here are your event details:

Event: {event}
Date: {date}
Time: {time}
Venue: {venue}

Your QR Code: {code}

Please save this email and bring your QR code to the event for quick check-in.

Best regards,
EventMaster Team"""


def _format_date(value: str) -> str:
    try:
        return date.fromisoformat(value).strftime("%m/%d/%Y")
    except ValueError:
        return value or "TBD"


def mailto_link(response: RSVPResponse, event: Event | None) -> str:
    """Build the mail link carrying a guest's check-in code."""
    subject = f"QR Code for {event.name if event else 'Event'}"
    body = BODY_TEMPLATE.format(
        guest=response.responses.get("name", "Guest"),
        event=event.name if event else "TBD",
        date=_format_date(event.date) if event else "TBD",
        time=(event.time if event else "") or "TBD",
        venue=(event.venue if event else "") or "TBD",
        code=response.qr_code,
    )
    recipient = quote(str(response.responses.get("email", "")), safe="@")
    return f"mailto:{recipient}?subject={quote(subject, safe='')}&body={quote(body, safe='')}"
