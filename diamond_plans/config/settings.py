from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    log_level: str = Field(default="INFO", validation_alias="DIAMOND_LOG_LEVEL")
    log_file: str | None = Field(
        default=None,
        validation_alias="DIAMOND_LOG_FILE",
        description="Optional rotating log file path",
    )
    plan_seed: int | None = Field(
        default=None,
        validation_alias="DIAMOND_PLAN_SEED",
        description="Seed for group shuffling; unset means a fresh grouping every call",
    )
    tick_interval_seconds: float = Field(
        default=0.25,
        validation_alias="DIAMOND_TICK_INTERVAL_SECONDS",
        description="Polling interval for the terminal practice runner",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid DIAMOND_LOG_LEVEL '{value}'. Valid levels are: {', '.join(valid_levels)}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("tick_interval_seconds")
    @classmethod
    def validate_tick_interval(cls, value: float) -> float:
        """Reject negative polling intervals."""
        if value < 0:
            logger.warning(f"DIAMOND_TICK_INTERVAL_SECONDS must be >= 0, got {value}. Defaulting to 0.25.")
            return 0.25
        return value

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
