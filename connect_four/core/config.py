import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()

DEFAULT_PROFILES_PATH = Path(__file__).resolve().parent.parent / "config" / "ai_profiles.yaml"


class Settings(BaseModel):
    log_level: str = "INFO"
    ai_thinking_delay: float = 0.5
    default_difficulty: str = "MEDIUM"
    ai_profiles_path: str = str(DEFAULT_PROFILES_PATH)


def get_settings() -> Settings:
    """Reads settings from the environment (and .env if present)."""
    return Settings(
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        ai_thinking_delay=float(os.getenv("AI_THINKING_DELAY", "0.5")),
        default_difficulty=os.getenv("DEFAULT_DIFFICULTY", "MEDIUM").upper(),
        ai_profiles_path=os.getenv("AI_PROFILES_PATH", str(DEFAULT_PROFILES_PATH)),
    )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


settings = get_settings()
