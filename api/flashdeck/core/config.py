from pydantic_settings import BaseSettings
from dotenv import load_dotenv
from pathlib import Path
import logging
import os

logger = logging.getLogger(__name__)


def _load_env_file() -> None:
    """Load api/.env, or .env from the working directory, without overriding the environment."""
    for env_path in (Path(__file__).parent.parent.parent / ".env", Path(".env")):
        if env_path.exists():
            load_dotenv(env_path, override=False)
            logger.info(f"Loaded .env file from: {env_path.absolute()}")
            return


_load_env_file()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = ""
    sql_echo: bool = False

    # Opaque token that must accompany every API call as ?uuid=
    session_uuid: str = ""

    # The user every request acts on behalf of
    active_user_id: int = 1

    # API
    api_prefix: str = "/api"

    # CORS
    cors_origins: list[str] = ["*"]

    # Number of youngest cards pulled into every review session
    daily_review_count: int = 9

    # Static assets (stylesheets, audio)
    assets_path: str = ""

    log_level: str = "INFO"
    environment: str = "production"

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"

    def __init__(self, **kwargs):
        # Hosting providers hand out DATABASE_URL / UUID in uppercase
        if not kwargs.get("database_url"):
            kwargs["database_url"] = os.getenv("DATABASE_URL", "")
        if not kwargs.get("session_uuid"):
            kwargs["session_uuid"] = os.getenv("SESSION_UUID", os.getenv("UUID", ""))
        super().__init__(**kwargs)

    @property
    def is_development(self) -> bool:
        return self.environment.lower() in ("development", "dev", "local")


settings = Settings()

if not settings.database_url:
    raise ValueError("DATABASE_URL environment variable is required")

if not settings.session_uuid:
    raise ValueError("SESSION_UUID environment variable is required")
