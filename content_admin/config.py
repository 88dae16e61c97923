import logging

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_SECRET_KEY = "change-me"


class Settings(BaseSettings):
    # Application settings
    app_name: str = "Content Admin"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"

    # Database settings
    database_url: str = "sqlite+aiosqlite:///./content_admin.db"

    # Security settings
    secret_key: str = DEFAULT_SECRET_KEY
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 12 * 60
    allow_initial_register: bool = False

    # CORS settings
    allowed_origins: list[str] = ["*"]

    # Row store retry policy
    store_max_attempts: int = 3
    store_base_delay_ms: int = 200

    # Export settings
    export_chunk_size: int = 500

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @property
    def store_base_delay(self) -> float:
        return self.store_base_delay_ms / 1000


settings = Settings()

if settings.secret_key == DEFAULT_SECRET_KEY:
    logger.warning("Using default SECRET_KEY. This is insecure and should be changed in production!")
