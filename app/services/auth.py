"""Identity gate and organizer session state.

There is exactly one organizer account, configured through settings. The
session is a flag in the ``appstate`` row, not a security boundary.
"""
import logging

from sqlmodel import Session

from app.core.config import settings
from app.models import AppState

logger = logging.getLogger(__name__)


def get_state(session: Session) -> AppState:
    """Load the app state row, creating it on first use."""
    state = session.get(AppState, 1)
    if state is None:
        state = AppState(id=1)
        session.add(state)
        session.commit()
        session.refresh(state)
    return state


def check_credentials(email: str, password: str) -> bool:
    return (
        email.strip().lower() == settings.admin_email.lower()
        and password == settings.admin_password
    )


def login(session: Session, email: str, password: str) -> bool:
    """Open the organizer session if the credentials match."""
    if not check_credentials(email, password):
        logger.warning(f"Failed login attempt for {email}")
        return False

    state = get_state(session)
    state.is_authenticated = True
    state.display_name = settings.admin_display_name
    session.add(state)
    session.commit()
    logger.info("Organizer logged in")
    return True


def logout(session: Session) -> None:
    """Close the session. The theme preference is kept."""
    state = get_state(session)
    state.is_authenticated = False
    state.display_name = None
    session.add(state)
    session.commit()
    logger.info("Organizer logged out")


def is_authenticated(session: Session) -> bool:
    return get_state(session).is_authenticated


def set_theme(session: Session, dark: bool | None = None) -> bool:
    """Set the dark-mode preference, or flip it when dark is None."""
    state = get_state(session)
    state.dark_mode = (not state.dark_mode) if dark is None else dark
    session.add(state)
    session.commit()
    return state.dark_mode
