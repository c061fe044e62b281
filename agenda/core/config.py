"""Configuration management for team-agenda."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # SQLite Configuration
    sqlite_db_path: str = Field(default="agenda.db", description="Path to the SQLite database file")

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")
    environment: str = Field(default="development", description="Deployment environment name")

    # Session Configuration
    secret_key: str = Field(default="change-me", description="Secret used to sign session cookies")
    access_password: str | None = Field(default=None, description="Shared password required to open a session")
    session_max_age_seconds: int = Field(default=86400, description="Session cookie lifetime in seconds")

    # Timeline Grid Configuration
    timeline_start_hour: int = Field(default=7, ge=0, le=23, description="First hour shown on the time ruler")
    timeline_end_hour: int = Field(default=23, ge=1, le=24, description="Last hour shown on the time ruler")
    slot_minutes: int = Field(default=30, gt=0, description="Duration of a single time slot in minutes")
    slot_height: int = Field(default=40, ge=0, description="Pixel height of an expanded slot")
    collapsed_slot_height: int = Field(default=1, ge=0, description="Pixel height of a collapsed slot")

    @property
    def is_production(self) -> bool:
        """Whether the app runs in production (secure cookies)."""
        return self.environment == "production"

    def require_credential(self, field_name: str, service_name: str) -> str:
        """Validate that a required credential is set, raising a clear error if missing.

        Args:
            field_name: Name of the field to check
            service_name: Human-readable service name for error message

        Returns:
            The credential value

        Raises:
            ValueError: If the credential is None or empty
        """
        value = getattr(self, field_name)
        if not value:
            raise ValueError(
                f"{service_name} credential not configured. "
                f"Set {field_name.upper()} environment variable or add to .env file."
            )
        return value


# Application Constants
class Constants:
    """Application-wide constants."""

    # HTTP Status Codes
    HTTP_OK: int = 200
    HTTP_BAD_REQUEST: int = 400
    HTTP_FORBIDDEN: int = 403
    HTTP_NOT_FOUND: int = 404
    HTTP_SERVER_ERROR: int = 500

    # Session
    SESSION_COOKIE_NAME: str = "agenda_session"
    SESSION_SALT: str = "agenda-session"

    # Organisation shifts shown in the shift column (name, start, end)
    DEFAULT_SHIFTS: tuple[tuple[str, str, str], ...] = (
        ("TM", "08:00", "13:00"),
        ("TV", "18:00", "22:30"),
    )

    # Daily timeline column widths (pixels)
    TIME_RULER_WIDTH: int = 60
    SHIFT_COLUMN_WIDTH: int = 40
    ACTIVE_COLUMN_WIDTH: int = 250
    INACTIVE_COLUMN_WIDTH: int = 120
    MIN_COLUMN_WIDTH: int = 100

    # Weekly canvas shows Monday to Friday
    WEEK_VIEW_DAYS: int = 5

    # Navigation never scans further than this many days when skipping empty weekends
    MAX_NAVIGATION_SKIP_DAYS: int = 7

    # Pagination Defaults
    DEFAULT_PER_PAGE_LIMIT: int = 1000


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
constants = Constants()
