"""Application configuration and settings."""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_BASE_DIR = Path(__file__).resolve().parents[1]
_ENV_FILE = _BASE_DIR / ".env"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE, env_file_encoding="utf-8", extra="ignore"
    )

    # CORS
    ui_origin: str = Field(
        default="http://localhost:5173",
        description="Allowed CORS origin for UI",
    )
    log_level: str = Field(default="INFO", description="Root logging level")

    # External APIs
    google_maps_api_key: str = Field(
        default="dummy-google-maps-api-key-for-tests",
        description="Google Maps key used for Places and Directions",
    )
    weather_api_key: str = Field(
        default="dummy-weather-api-key-for-tests", description="OpenWeatherMap API key"
    )
    openai_api_key: str = Field(
        default="dummy-openai-api-key-for-tests",
        description="OpenAI API key for activity extraction",
    )
    openai_model: str = Field(
        default="gpt-4o-mini", description="OpenAI model for activity extraction"
    )

    # Metro area
    metro_name: str = Field(default="Boston, MA", description="Metro appended to searches")
    metro_center_lat: float = Field(default=42.3601, description="Metro center latitude")
    metro_center_lon: float = Field(default=-71.0589, description="Metro center longitude")
    timezone: str = Field(default="America/New_York", description="IANA timezone of the metro")
    search_radius_m: int = Field(
        default=15000, description="Viewport bias radius for place search in meters"
    )

    # Performance Settings
    fanout_cap: int = Field(
        default=4, description="Max concurrent provider calls per planning request"
    )
    plan_deadline_s: float = Field(
        default=30.0, description="Overall deadline for one planning request"
    )

    # Cache TTLs
    weather_ttl_minutes: int = Field(
        default=30, description="Weather data cache TTL in minutes"
    )
    places_ttl_hours: int = Field(default=48, description="Place search cache TTL in hours")

    # Timeouts (seconds)
    soft_timeout_s: float = Field(
        default=2.0, description="Soft timeout for tool calls"
    )
    hard_timeout_s: float = Field(
        default=4.0, description="Hard timeout for tool calls"
    )
    extractor_timeout_s: float = Field(
        default=15.0, description="Timeout for the language-model extraction call"
    )

    # Retry Configuration
    retry_jitter_min_ms: int = Field(
        default=200, description="Minimum retry jitter in milliseconds"
    )
    retry_jitter_max_ms: int = Field(
        default=500, description="Maximum retry jitter in milliseconds"
    )

    # Circuit Breaker
    breaker_failure_threshold: int = Field(
        default=5, description="Failures before circuit breaker opens"
    )
    breaker_timeout_s: int = Field(
        default=60, description="Circuit breaker timeout in seconds"
    )

    # Venue resolution
    min_match_confidence: float = Field(
        default=0.5, description="Minimum confidence to accept a place candidate"
    )
    max_alternatives: int = Field(
        default=3, ge=0, description="Runner-up venues kept per stop for weather swaps"
    )

    # Scheduling
    default_activity_duration_min: int = Field(
        default=60, description="Duration for activities without a known category"
    )
    travel_overhead_min: int = Field(
        default=15, description="Anticipated travel overhead between stops in minutes"
    )
    min_filler_gap_min: int = Field(
        default=90, description="Idle minutes that trigger gap filling"
    )
    filler_duration_min: int = Field(
        default=60, description="Default duration of a gap-filler stop"
    )
    min_filler_duration_min: int = Field(
        default=30, description="Shortest filler worth inserting"
    )
    max_fillers: int = Field(default=3, description="Max filler stops per itinerary")
    placeholder_travel_min: int = Field(
        default=30, description="Travel minutes used when directions are unavailable"
    )

    # Gap-filling policy
    filler_pace: Literal["relaxed", "moderate", "busy"] = Field(
        default="relaxed", description="Pace preference driving crowd tolerance"
    )
    crowd_weight: float = Field(default=0.5, description="Weight of crowd fit in filler ranking")
    weather_weight: float = Field(
        default=0.2, description="Weight of weather fit in filler ranking"
    )
    proximity_weight: float = Field(
        default=0.3, description="Weight of proximity in filler ranking"
    )

    @field_validator("soft_timeout_s", "hard_timeout_s", "plan_deadline_s", mode="after")
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        """Timeouts must be positive."""
        if value <= 0:
            raise ValueError("Timeouts must be positive")
        return value


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get application settings singleton."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


class MissingOpenAIKeyError(RuntimeError):
    """Raised when an OpenAI API key is not configured."""


def get_openai_api_key(settings: Settings | None = None) -> str:
    """Return a validated OpenAI API key or raise a helpful error."""
    settings = settings or get_settings()
    api_key = (settings.openai_api_key or "").strip()
    if not api_key or api_key.startswith("dummy-"):
        raise MissingOpenAIKeyError(
            "OpenAI API key is not configured. "
            "Set OPENAI_API_KEY in your environment (.env) to enable language-model extraction."
        )
    return api_key


def has_real_key(value: str | None) -> bool:
    """Whether a provider key looks configured (not empty, not a test dummy)."""
    value = (value or "").strip()
    return bool(value) and not value.startswith("dummy-")
