from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
from functools import lru_cache
from typing import FrozenSet, List


class Settings(BaseSettings):
    # Environment
    environment: str = Field(default="development", alias="ENVIRONMENT")

    # Database - PostgreSQL for production, SQLite for development
    database_url: str = Field(
        default="sqlite:///./channel_bridge.db",
        alias="DATABASE_URL"
    )

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_json: bool = Field(default=True, alias="LOG_JSON")

    # CORS - comma-separated
    allowed_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        alias="ALLOWED_ORIGINS"
    )

    # ==============================================
    # PMS (MiniCal-style API)
    # ==============================================
    pms_base_url: str = Field(
        default="http://localhost/minical/api",
        alias="PMS_BASE_URL"
    )
    # API key wins over basic credentials when both are set
    pms_api_key: str = Field(default="", alias="PMS_API_KEY")
    pms_username: str = Field(default="", alias="PMS_USERNAME")
    pms_password: str = Field(default="", alias="PMS_PASSWORD")
    pms_timeout_seconds: float = Field(default=10, alias="PMS_TIMEOUT_SECONDS")

    # ==============================================
    # Channel manager (YieldPlanet-style API)
    # ==============================================
    channel_base_url: str = Field(
        default="https://api.yieldplanet.com/v1",
        alias="CHANNEL_BASE_URL"
    )
    channel_username: str = Field(default="", alias="CHANNEL_USERNAME")
    channel_password: str = Field(default="", alias="CHANNEL_PASSWORD")
    channel_api_key: str = Field(default="", alias="CHANNEL_API_KEY")
    channel_timeout_seconds: float = Field(default=30, alias="CHANNEL_TIMEOUT_SECONDS")

    # ==============================================
    # Sync behaviour
    # ==============================================
    # Extra inline attempts for the reservation-linkage write
    reservation_persist_extra_attempts: int = Field(
        default=1,
        alias="RESERVATION_PERSIST_EXTRA_ATTEMPTS"
    )

    # Booking sources allowed to arrive without an id on that side (comma-separated)
    pms_id_optional_sources: str = Field(default="ai_agent", alias="PMS_ID_OPTIONAL_SOURCES")
    channel_id_optional_sources: str = Field(default="", alias="CHANNEL_ID_OPTIONAL_SOURCES")

    # Default horizon for initial sync when no end date is given
    default_sync_days: int = Field(default=30, alias="DEFAULT_SYNC_DAYS")

    @field_validator('reservation_persist_extra_attempts')
    @classmethod
    def validate_extra_attempts(cls, v: int) -> int:
        if v < 0:
            raise ValueError("RESERVATION_PERSIST_EXTRA_ATTEMPTS cannot be negative")
        return v

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def cors_origins(self) -> List[str]:
        """Parse allowed origins from comma-separated string."""
        origins = []
        for origin in self.allowed_origins.split(","):
            origin = origin.strip().rstrip("/")
            if origin and origin not in origins:
                origins.append(origin)
        return origins or ["http://localhost:5173"]

    @property
    def pms_id_optional_source_set(self) -> FrozenSet[str]:
        return _split_csv(self.pms_id_optional_sources)

    @property
    def channel_id_optional_source_set(self) -> FrozenSet[str]:
        return _split_csv(self.channel_id_optional_sources)

    class Config:
        env_file = ".env"
        extra = "ignore"
        populate_by_name = True


def _split_csv(value: str) -> FrozenSet[str]:
    return frozenset(part.strip() for part in value.split(",") if part.strip())


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Initialize settings on module load
settings = get_settings()
