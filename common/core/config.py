from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

from common.core.constants import Environment


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Environment Profile
    environment: Environment = Environment.LOCAL

    # App Settings
    app_name: str = "survey-backend"
    debug: bool = False

    # Database Components
    db_user: str = "survey"
    db_password: str = "survey"
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "survey"
    db_use_nullpool: bool = (
        False  # True for workers (sequential), False for API (concurrent)
    )
    db_pool_size: int = 10
    db_pool_overflow: int = 5

    @property
    def database_url(self) -> str:
        """Construct database URL from components."""
        return f"postgresql://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    # OpenTelemetry
    otel_service_name: str = "survey-backend"
    otel_service_version: str = "0.1.0"

    # Axiom (exporters are only attached when a token is set)
    axiom_token: Optional[str] = None
    axiom_dataset: Optional[str] = None

    # Surveys
    default_language: str = "en"
    fixtures_dir: Optional[Path] = None  # Base folder for relative survey fixture paths


settings = Settings()
