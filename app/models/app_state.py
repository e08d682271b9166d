"""Application state for the organizer session and display preferences.

The session flag, the display name and the theme preference live in their
own typed table, apart from the domain collections in the key-value store.
"""

from sqlmodel import Field, SQLModel


class AppState(SQLModel, table=True):
    """Singleton row holding the current organizer session.

    Attributes:
        id: Always 1; the application is single-tenant.
        is_authenticated: Set by a successful login, cleared by logout.
        display_name: Name shown for the logged-in organizer.
        dark_mode: Theme preference; survives logout.
    """
    id: int = Field(default=1, primary_key=True)
    is_authenticated: bool = Field(default=False)
    display_name: str | None = None
    dark_mode: bool = Field(default=False)
