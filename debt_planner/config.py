"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="DEBT_PLANNER_", extra="ignore"
    )

    # Service
    service_name: str = "debt-planner"
    log_level: str = "INFO"

    # Simulation
    max_simulation_months: int = 1200  # Safety cap standing in for a timeout

    # Insights
    promo_alert_window_months: int = 3
    high_apr_threshold: float = 15.0


settings = Settings()
