from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from workout_conflicts.conflicts.constants import DEFAULT_THRESHOLDS, ConflictThresholds


class Settings(BaseSettings):
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="LOG_FILE")
    aggregate_by_default: bool = Field(
        default=False,
        validation_alias="CONFLICT_AGGREGATE_BY_DEFAULT",
        description="Collapse duplicate diagnostics before returning them from the CLI",
    )
    short_duration_threshold: int | None = Field(
        default=None,
        validation_alias="CONFLICT_SHORT_DURATION_THRESHOLD",
        description="Override for the short workout cutoff in minutes",
    )
    long_duration_threshold: int | None = Field(
        default=None,
        validation_alias="CONFLICT_LONG_DURATION_THRESHOLD",
        description="Override for the long workout cutoff in minutes",
    )
    low_energy_threshold: int | None = Field(
        default=None,
        validation_alias="CONFLICT_LOW_ENERGY_THRESHOLD",
        description="Override for the low energy rating cutoff (1-5 scale)",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(sorted(valid_levels))}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    def thresholds(self) -> ConflictThresholds:
        """Build the threshold table with any environment overrides applied."""
        overrides = {
            "SHORT_DURATION_THRESHOLD": self.short_duration_threshold,
            "LONG_DURATION_THRESHOLD": self.long_duration_threshold,
            "LOW_ENERGY_THRESHOLD": self.low_energy_threshold,
        }
        overrides = {name: value for name, value in overrides.items() if value is not None}
        if not overrides:
            return DEFAULT_THRESHOLDS
        logger.info("Applying threshold overrides from environment", overrides=overrides)
        return ConflictThresholds(**{**DEFAULT_THRESHOLDS.model_dump(), **overrides})


settings = Settings()
