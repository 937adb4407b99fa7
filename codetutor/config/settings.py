from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings - only define what needs validation."""

    DEBUG: bool = False
    API_HOST: str = "127.0.0.1"
    API_PORT: int = 8080
    ENVIRONMENT: str = "development"  # "development", "production", "test"
    CORS_ORIGINS: list[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]

    # Storage
    SEED_SAMPLE_DATA: bool = True

    # Rate limiting (slowapi)
    RATE_LIMIT_ENABLED: bool = True

    # Code runner
    CODE_RUN_TIMEOUT_SECONDS: float = 5.0

    # AI Configuration
    PRIMARY_LLM_MODEL: str | None = None
    AI_REQUEST_TIMEOUT: int = 300
    AI_TEMPERATURE_DEFAULT: float = 0.7

    @property
    def primary_llm_model(self) -> str:
        """Get primary LLM model - required for any AI call."""
        if not self.PRIMARY_LLM_MODEL:
            msg = "PRIMARY_LLM_MODEL environment variable is required"
            raise ValueError(msg)
        return self.PRIMARY_LLM_MODEL

    @property
    def ai_configured(self) -> bool:
        return bool(self.PRIMARY_LLM_MODEL)

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="allow",
        case_sensitive=False,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    settings = Settings()
    if settings.CODE_RUN_TIMEOUT_SECONDS <= 0:
        msg = "CODE_RUN_TIMEOUT_SECONDS must be positive"
        raise ValueError(msg)
    return settings
