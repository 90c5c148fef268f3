"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "budget-planner"
    log_level: str = "INFO"

    # Narrative service
    narrative_api_base: str = "http://localhost:8003"
    narrative_timeout_seconds: float = 10.0
    narrative_max_attempts: int = 3
    narrative_backoff_base: float = 1.0  # Exponential backoff base in seconds
    narrative_backoff_cap: float = 8.0
    narrative_backoff_jitter: float = 0.5  # Upper bound of uniform jitter in seconds

    # Planning
    blended_annual_return_rate: float = 0.09
    affordability_ratio: float = 0.5  # Share of monthly income available for savings


settings = Settings()
