"""RSVP form and response models.

An event has at most one RSVP form, built field by field by the organizer.
Guests submit the form through the public RSVP endpoint; each submission
becomes an ``RSVPResponse`` keyed by field name.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from sqlmodel import Field, SQLModel

from app.models.common import new_id, utcnow

DEFAULT_THANK_YOU = "Thank you for your RSVP! We look forward to seeing you at the event."


class FieldType(str, Enum):
    TEXT = "text"
    EMAIL = "email"
    PHONE = "phone"
    SELECT = "select"
    RADIO = "radio"
    CHECKBOX = "checkbox"
    FILE = "file"


# Field types that offer a fixed list of choices
CHOICE_TYPES = {FieldType.SELECT, FieldType.RADIO}


class RSVPField(SQLModel):
    """A single question on an RSVP form.

    Attributes:
        id: Identifier, unique within the form.
        name: Key under which answers are stored in a response.
        type: Input kind.
        required: Whether a submission must answer it.
        options: Choices, only meaningful for select and radio fields.
        placeholder: Hint text shown in the empty input.
    """
    id: str = Field(default_factory=new_id)
    name: str
    type: FieldType = FieldType.TEXT
    required: bool = False
    options: list[str] = Field(default_factory=list)
    placeholder: str = ""


class RSVPForm(SQLModel):
    """The RSVP form of one event. Field order is display order."""
    id: str = Field(default_factory=new_id)
    event_id: str
    fields: list[RSVPField] = Field(default_factory=list)
    thank_you_message: str = DEFAULT_THANK_YOU
    is_active: bool = True


class RSVPResponse(SQLModel):
    """A guest's submitted answers.

    Attributes:
        id: Timestamp-based identifier.
        form_id: Form the answers were given to ("demo" for seeded data).
        event_id: Owning event.
        responses: Field name to submitted value.
        submitted_at: When the guest submitted.
        qr_code: Check-in label derived from the submission time.
        is_demo: True for records created by the demo seeder.
    """
    id: str = Field(default_factory=new_id)
    form_id: str
    event_id: str
    responses: dict[str, Any] = Field(default_factory=dict)
    submitted_at: datetime = Field(default_factory=utcnow)
    qr_code: str = ""
    is_demo: bool = False


class RSVPFormUpdate(SQLModel):
    thank_you_message: str | None = None
    is_active: bool | None = None


class RSVPFieldCreate(SQLModel):
    name: str = "new_field"
    type: FieldType = FieldType.TEXT
    required: bool = False
    options: list[str] = Field(default_factory=list)
    placeholder: str = "Enter placeholder text"


class RSVPFieldUpdate(SQLModel):
    name: str | None = None
    type: FieldType | None = None
    required: bool | None = None
    options: list[str] | None = None
    placeholder: str | None = None


class RSVPSubmission(SQLModel):
    responses: dict[str, Any] = Field(default_factory=dict)
