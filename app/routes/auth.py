"""Organizer login, logout and display preference routes."""
from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, SQLModel

from app.core.database import get_session
from app.services import auth

router = APIRouter(prefix="/auth", tags=["auth"])


class LoginRequest(SQLModel):
    email: str
    password: str


class ThemeRequest(SQLModel):
    dark: bool | None = None


def _status(session: Session) -> dict:
    state = auth.get_state(session)
    return {
        "authenticated": state.is_authenticated,
        "display_name": state.display_name,
        "dark_mode": state.dark_mode,
    }


@router.post("/login")
async def login(body: LoginRequest, session: Session = Depends(get_session)):
    """
    Log the organizer in.

    Only the configured credential pair is accepted; anything else is
    answered with 401 and the session stays closed.
    """
    if not auth.login(session, body.email, body.password):
        raise HTTPException(status_code=401, detail="Invalid credentials. Please try again.")
    return _status(session)


@router.post("/logout")
async def logout(session: Session = Depends(get_session)):
    """Log the organizer out."""
    auth.logout(session)
    return _status(session)


@router.get("/status")
async def auth_status(session: Session = Depends(get_session)):
    """Current session flag, display name and theme preference."""
    return _status(session)


@router.post("/theme")
async def set_theme(body: ThemeRequest, session: Session = Depends(get_session)):
    """Set dark mode on or off, or toggle it when no value is given."""
    auth.set_theme(session, body.dark)
    return _status(session)
