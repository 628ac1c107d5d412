import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

from content_forge.llm.client import DEFAULT_BASE_URL, DEFAULT_MODEL

logger = logging.getLogger(__name__)

load_dotenv(dotenv_path=Path(__file__).resolve().parent / ".env")


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    api_key: str | None = None
    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000
    session_idle_seconds: float = 3600.0


def load_settings() -> Settings:
    """Read settings from the environment once, at startup.

    A missing API key is only a warning: the app still starts and every
    generation comes back as a failure.
    """
    api_key = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY")
    if not api_key:
        logger.warning(
            "API key not found. Please ensure the GEMINI_API_KEY "
            "(or API_KEY) environment variable is set."
        )
    return Settings(
        api_key=api_key or None,
        model=os.getenv("LLM_MODEL") or DEFAULT_MODEL,
        base_url=os.getenv("LLM_BASE_URL") or DEFAULT_BASE_URL,
        log_level=os.getenv("LOG_LEVEL") or "INFO",
        host=os.getenv("HOST") or "127.0.0.1",
        port=int(os.getenv("PORT") or 8000),
        session_idle_seconds=float(os.getenv("SESSION_IDLE_SECONDS") or 3600),
    )
