"""Storage key scheme.

Every per-event collection lives under ``<kind>_<event_id>`` so that two
events never share a key. The event list itself is a single global key.
"""

EVENTS = "events"

TASKS = "tasks"
NOTES = "notes"
RESOURCES = "resources"
FILES = "files"
RSVP_FORM = "rsvp_form"
RSVP_RESPONSES = "rsvp_responses"

# Every kind of data owned by a single event
EVENT_SCOPED = (TASKS, NOTES, RESOURCES, FILES, RSVP_FORM, RSVP_RESPONSES)


def event_key(kind: str, event_id: str) -> str:
    """Namespaced key for one event's collection of the given kind."""
    if kind not in EVENT_SCOPED:
        raise ValueError(f"Unknown collection kind: {kind}")
    return f"{kind}_{event_id}"


def tasks(event_id: str) -> str:
    return event_key(TASKS, event_id)


def notes(event_id: str) -> str:
    return event_key(NOTES, event_id)


def resources(event_id: str) -> str:
    return event_key(RESOURCES, event_id)


def files(event_id: str) -> str:
    return event_key(FILES, event_id)


def rsvp_form(event_id: str) -> str:
    return event_key(RSVP_FORM, event_id)


def rsvp_responses(event_id: str) -> str:
    return event_key(RSVP_RESPONSES, event_id)


def for_event(event_id: str) -> list[str]:
    """All keys that belong to an event."""
    return [event_key(kind, event_id) for kind in EVENT_SCOPED]
