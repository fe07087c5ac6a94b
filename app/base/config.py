import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    # === App Metadata ===
    PROJECT_NAME: str = "Hirefy Interview Slots"
    ENVIRONMENT: str = Field("dev")  # dev, staging, prod
    DEBUG_MODE: bool = Field(False)
    API_VERSION: str = "v1"

    # === Logging ===
    LOG_LEVEL: str = Field("INFO")
    ENABLE_JSON_LOGS: bool = Field(False)

    @property
    def LOG_LEVEL_NUMERIC(self) -> int:
        return getattr(logging, self.LOG_LEVEL.upper(), logging.INFO)

    # === Slot Grid ===
    SCHEDULING_WINDOW_DAYS: int = Field(14, gt=0)
    SLOT_DURATION_MINUTES: int = Field(30, gt=0)
    WEEK_STARTS_ON: int = Field(0)  # 0 = Sunday

    # === Simulated Network Behaviour ===
    BOOK_LATENCY_SECONDS: float = Field(0.5, ge=0)
    RESCHEDULE_LATENCY_SECONDS: float = Field(0.5, ge=0)
    CANCEL_LATENCY_SECONDS: float = Field(0.3, ge=0)
    SIMULATED_CONFLICT_RATE: float = Field(0.05)

    # === Pagination ===
    DEFAULT_PAGE_SIZE: int = Field(10, gt=0)
    MAX_PAGE_SIZE: int = Field(100, gt=0)

    # === Default Interviewer ===
    DEFAULT_INTERVIEWER_ID: str = Field("interviewer-1")
    DEFAULT_INTERVIEWER_NAME: str = Field("John Smith")
    DEFAULT_INTERVIEWER_EMAIL: str = Field("john.smith@company.com")
    DEFAULT_MAX_INTERVIEWS_PER_WEEK: int = Field(20, gt=0)

    # === Feature Flags ===
    ENABLE_PROMETHEUS: bool = Field(True)

    # === Environment Shortcuts ===
    @property
    def IS_PROD(self) -> bool:
        return self.ENVIRONMENT.lower() == "prod"

    @field_validator("SIMULATED_CONFLICT_RATE")
    @classmethod
    def validate_conflict_rate(cls, rate):
        if not 0.0 <= rate <= 1.0:
            raise ValueError("SIMULATED_CONFLICT_RATE must be between 0 and 1")
        return rate

    @field_validator("WEEK_STARTS_ON")
    @classmethod
    def validate_week_start(cls, day):
        if day not in range(7):
            raise ValueError("WEEK_STARTS_ON must be a day number from 0 (Sunday) to 6 (Saturday)")
        return day

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> AppConfig:
    return AppConfig()


# Global config instance
settings = get_settings()
