"""RSVP form builder service.

Each event has at most one form, stored as a single document. Fields keep
the order in which they were added; that order is the display order of the
public form.
"""
import logging

from app.core.config import settings
from app.models import RSVPField, RSVPFieldCreate, RSVPFieldUpdate, RSVPForm
from app.models.rsvp import CHOICE_TYPES, FieldType
from app.storage import Document, KeyValueStore, keys

logger = logging.getLogger(__name__)


def form_document(store: KeyValueStore, event_id: str) -> Document[RSVPForm]:
    return Document(store, keys.rsvp_form(event_id), RSVPForm)


def get_form(store: KeyValueStore, event_id: str) -> RSVPForm | None:
    return form_document(store, event_id).load()


def default_fields() -> list[RSVPField]:
    return [
        RSVPField(id="1", name="name", type=FieldType.TEXT, required=True,
                  placeholder="Your full name"),
        RSVPField(id="2", name="email", type=FieldType.EMAIL, required=True,
                  placeholder="your@email.com"),
    ]


def create_form(store: KeyValueStore, event_id: str) -> RSVPForm:
    """Create the event's form with name and email fields, or return the existing one."""
    document = form_document(store, event_id)
    existing = document.load()
    if existing:
        return existing

    form = RSVPForm(event_id=event_id, fields=default_fields())
    document.save(form)
    logger.info(f"Created RSVP form {form.id} for event {event_id}")
    return form


def update_form(
    store: KeyValueStore,
    event_id: str,
    thank_you_message: str | None = None,
    is_active: bool | None = None,
) -> RSVPForm | None:
    document = form_document(store, event_id)
    form = document.load()
    if form is None:
        return None
    if thank_you_message is not None:
        form.thank_you_message = thank_you_message
    if is_active is not None:
        form.is_active = is_active
    return document.save(form)


def _clean_options(field_type: FieldType, options: list[str]) -> list[str]:
    if field_type not in CHOICE_TYPES:
        return []
    return [o.strip() for o in options if o.strip()]


def _clean_name(name: str) -> str:
    name = name.strip()
    if not name:
        raise ValueError("Field name must not be empty")
    return name


def add_field(store: KeyValueStore, event_id: str, data: RSVPFieldCreate) -> RSVPField | None:
    """Append a field to the end of the form. None if the event has no form."""
    document = form_document(store, event_id)
    form = document.load()
    if form is None:
        return None

    new_field = RSVPField(
        name=_clean_name(data.name),
        type=data.type,
        required=data.required,
        options=_clean_options(data.type, data.options),
        placeholder=data.placeholder,
    )
    form.fields.append(new_field)
    document.save(form)
    return new_field


def update_field(
    store: KeyValueStore, event_id: str, field_id: str, data: RSVPFieldUpdate
) -> RSVPField | None:
    document = form_document(store, event_id)
    form = document.load()
    if form is None:
        return None

    target = next((f for f in form.fields if f.id == field_id), None)
    if target is None:
        return None

    changes = data.model_dump(exclude_unset=True)
    if changes.get("name") is not None:
        target.name = _clean_name(changes["name"])
    if changes.get("type") is not None:
        target.type = FieldType(changes["type"])
    if changes.get("required") is not None:
        target.required = changes["required"]
    if changes.get("placeholder") is not None:
        target.placeholder = changes["placeholder"]
    options = changes["options"] if changes.get("options") is not None else target.options
    target.options = _clean_options(target.type, options)

    document.save(form)
    return target


def remove_field(store: KeyValueStore, event_id: str, field_id: str) -> bool:
    document = form_document(store, event_id)
    form = document.load()
    if form is None:
        return False

    remaining = [f for f in form.fields if f.id != field_id]
    if len(remaining) == len(form.fields):
        return False
    form.fields = remaining
    document.save(form)
    return True


def share_link(event_id: str) -> str:
    """Public URL guests use to open the event's RSVP form."""
    return f"{settings.base_url.rstrip('/')}/rsvp/{event_id}"
