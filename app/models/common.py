"""Identifier and timestamp helpers shared by the stored entities."""

import secrets
import string
import time
from datetime import UTC, datetime

_ALPHABET = string.digits + string.ascii_lowercase


def timestamp_ms() -> int:
    """Milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


def new_id() -> str:
    """Return a timestamp-based id with a short random base-36 suffix.

    Uniqueness is probabilistic only; ids are never checked for collisions.
    """
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(6))
    return f"{timestamp_ms()}{suffix}"


def utcnow() -> datetime:
    return datetime.now(UTC)
