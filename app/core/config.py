from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.core.errors import MissingConfigurationError

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./portfolio.db"
    # Optional at startup; every generation request checks it via require_api_key
    GOOGLE_GENERATIVE_AI_API_KEY: Optional[str] = None
    GENERATION_MODEL: str = "gemini-2.5-flash"

    JWT_SECRET_KEY: str = "change-me"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()


def require_api_key(config: Settings) -> str:
    """Return the generation credential or raise MissingConfigurationError."""
    api_key = (config.GOOGLE_GENERATIVE_AI_API_KEY or "").strip()
    if not api_key:
        raise MissingConfigurationError("Missing GOOGLE_GENERATIVE_AI_API_KEY")
    return api_key
