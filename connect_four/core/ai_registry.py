import logging
from typing import Dict, Optional

import yaml
from pydantic import BaseModel, field_validator

from connect_four.core.config import settings
from connect_four.engine.ai import Difficulty

logger = logging.getLogger(__name__)


def parse_difficulty(value) -> Difficulty:
    """Accepts a Difficulty, its name ("HARD") or its depth (6)."""
    if isinstance(value, Difficulty):
        return value
    if isinstance(value, str):
        try:
            return Difficulty[value.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown difficulty: {value}")
    return Difficulty(value)


class AIProfile(BaseModel):
    label: str
    difficulty: Difficulty
    thinking_delay: float = 0.5

    @field_validator("difficulty", mode="before")
    @classmethod
    def _coerce_difficulty(cls, v):
        return parse_difficulty(v)


class AIProfileRegistry:
    def __init__(self, config_path: str = settings.ai_profiles_path):
        self.profiles: Dict[str, AIProfile] = {}
        self._load(config_path)

    def _load(self, path: str):
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
            for key, val in data.get("profiles", {}).items():
                self.profiles[key] = AIProfile(**val)
        logger.debug("Loaded %d AI profiles from %s", len(self.profiles), path)

    def get(self, profile_key: str) -> Optional[AIProfile]:
        return self.profiles.get(profile_key)

    def resolve(self, profile_key: Optional[str]) -> AIProfile:
        """
        Returns the profile for `profile_key`, falling back to the default
        difficulty when the key is unknown or missing.
        """
        if profile_key:
            profile = self.get(profile_key.lower())
            if profile:
                return profile
            logger.warning("Unknown AI profile %r, using default difficulty", profile_key)

        difficulty = parse_difficulty(settings.default_difficulty)
        return AIProfile(
            label=difficulty.name.capitalize(),
            difficulty=difficulty,
            thinking_delay=settings.ai_thinking_delay,
        )

    def list_all(self) -> Dict[str, AIProfile]:
        return self.profiles


# Singleton instance
registry = AIProfileRegistry()
