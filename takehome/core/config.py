"""Engine configuration using Pydantic Settings."""

from decimal import Decimal
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LOG_FORMATS = ("json", "console")


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Environment
    environment: str = "development"
    """Current environment (development, staging, production)."""

    debug: bool = False
    """Enable debug logging."""

    log_format: str | None = None
    """Logging format override (json or console). Defaults by environment."""

    # Tax defaults
    default_tax_year: int = 2025
    """Tax year used when a caller supplies neither a config nor a year."""

    default_state: str = "TX"
    """State used by callers that need a neutral (no income tax) state."""

    # Net-to-gross solver
    net_to_gross_max_gross: Decimal = Decimal("2000000")
    """Ceiling for the solver's upper-bound expansion."""

    net_to_gross_max_iterations: int = 100
    """Bisection iteration budget."""

    @field_validator("log_format", mode="before")
    @classmethod
    def parse_log_format(cls, value: object) -> str | None:
        """Normalize the log format and reject unknown renderers."""
        if value is None:
            return None
        text = str(value).strip().lower()
        if not text:
            return None
        if text not in LOG_FORMATS:
            raise ValueError(
                f"LOG_FORMAT must be one of {', '.join(LOG_FORMATS)}, got {value!r}."
            )
        return text

    @field_validator("default_state", mode="before")
    @classmethod
    def normalize_default_state(cls, value: object) -> str:
        """Upper-case the default state code."""
        return str(value).strip().upper()


try:
    settings = Settings()
except Exception as exc:
    env_file = Path(".env")
    raise RuntimeError(
        "Failed to initialize engine settings. "
        f"Check environment variables in {env_file.resolve() if env_file.exists() else '.env'}.\n"
        f"Error: {exc}\n"
        "Allowed values for LOG_FORMAT are: json, console"
    ) from exc
