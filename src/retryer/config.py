"""
Configuration settings for the retryer.

Builder defaults and logging options are loaded from environment variables
(prefixed with RETRYER_) with sensible defaults. Use a .env file for local
development.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from retryer.duration import Duration, TimeUnit


class Settings(BaseSettings):
    """Retryer settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="RETRYER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Builder Defaults ===
    MAX_ATTEMPTS: int = Field(default=3, ge=0)  # Extra attempts after the first
    DELAY: float = Field(default=0, ge=0, allow_inf_nan=False)  # 0 = no pause between attempts
    DELAY_UNIT: TimeUnit = TimeUnit.SECONDS

    # === Logging ===
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"  # "production" switches to JSON logs

    @field_validator("DELAY_UNIT", mode="before")
    @classmethod
    def parse_delay_unit(cls, value: object) -> TimeUnit:
        return TimeUnit.parse(value)

    @property
    def default_delay(self) -> Duration:
        return Duration(self.DELAY, self.DELAY_UNIT)


# Global settings instance
settings = Settings()
