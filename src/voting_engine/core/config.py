"""Engine configuration via Pydantic Settings.

All configuration is loaded from environment variables following 12-factor
principles. A single process-wide instance is shared by the services and can
be replaced between operations with :func:`configure`.
"""

from datetime import timedelta

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Voting window
    min_voting_duration: timedelta = Field(
        default=timedelta(minutes=5),
        description="Shortest allowed span between starts_at and ends_at",
    )
    max_voting_duration: timedelta = Field(
        default=timedelta(days=7),
        description="Longest allowed span between starts_at and ends_at",
    )

    # Candidates
    min_candidates_election: int = Field(
        default=2,
        description="Minimum number of candidates for an election",
        ge=1,
    )
    can_candidate_start_voting: bool = Field(
        default=False,
        description="Allow the voter starting a candidate-based voting to be one of its candidates",
    )

    # Votes
    can_voter_vote_for_himself: bool = Field(
        default=False,
        description="Allow a voter to cast a choice targeting themselves",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_json: bool = Field(
        default=False,
        description="Serialize stderr log records as JSON lines",
    )
    log_dir: str | None = Field(
        default=None,
        description="Directory for log files (enables file logging with 24h rotation when set)",
    )

    @field_validator("min_voting_duration", "max_voting_duration", mode="before")
    @classmethod
    def parse_milliseconds(cls, v: object) -> object:
        """Read bare numbers, including numeric env strings, as milliseconds."""
        if isinstance(v, str) and v.strip().isdigit():
            v = int(v)
        if isinstance(v, int | float) and not isinstance(v, bool):
            return timedelta(milliseconds=v)
        return v

    @model_validator(mode="after")
    def validate_duration_bounds(self) -> "Settings":
        if self.max_voting_duration < self.min_voting_duration:
            msg = "max_voting_duration must not be shorter than min_voting_duration"
            raise ValueError(msg)
        return self


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def configure(settings: Settings | None = None) -> Settings:
    """Replace the process-wide settings.

    Args:
        settings: New settings instance. When None, settings are reloaded
            from the environment on next access.

    Returns:
        The settings now in effect.
    """
    global _settings
    _settings = settings
    return get_settings()
