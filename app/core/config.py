"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or .env file."""
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Application
    app_name: str = "EventMaster"
    debug: bool = False
    log_dir: str = "~/.logs/eventmaster"

    # Server
    host: str = "0.0.0.0"  # Bind to all interfaces for external access
    port: int = 8000
    allowed_origins: str = "*"  # Comma-separated origins, or "*" for all
    base_url: str = "http://localhost:8000"  # Used for shareable RSVP links

    # Database (backs the key-value store and the app state table)
    database_url: str = "sqlite:///./eventmaster.db"

    # Identity gate: a single hard-coded organizer account
    admin_email: str = "admin@eventmaster.com"
    admin_password: str = "demo123"
    admin_display_name: str = "Event Admin"
    admin_user_id: str = "1"

    # RSVP
    seed_demo_data: bool = True
    rsvp_submit_delay_seconds: float = 1.0

    # Notes
    note_autosave_seconds: float = 2.0
    note_history_limit: int | None = None  # None keeps every prior version

    # Files
    upload_dir: str = "./uploads"
    upload_tick_seconds: float = 0.2
    upload_step: int = 10
    upload_retention_seconds: float = 60.0  # How long finished uploads stay queryable
    max_upload_size: int = 10 * 1024 * 1024  # 10MB


settings = Settings()
