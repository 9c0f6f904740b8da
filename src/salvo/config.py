"""Game settings loaded from the environment."""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Any

from pydantic import BaseModel, Field, field_validator

from salvo.engine.placement import MAX_PLACEMENT_ATTEMPTS
from salvo.engine.strategies import ATTACK_STRATEGIES

_ENV_FIELDS = {
    "opponent": "SALVO_OPPONENT",
    "computer_delay_seconds": "SALVO_COMPUTER_DELAY",
    "seed": "SALVO_SEED",
    "max_placement_attempts": "SALVO_MAX_PLACEMENT_ATTEMPTS",
}


class GameSettings(BaseModel):
    """Runtime settings for a game against the computer."""

    opponent: str = "unfair"
    computer_delay_seconds: float = Field(default=1.0, ge=0)
    seed: int | None = None
    max_placement_attempts: int = Field(default=MAX_PLACEMENT_ATTEMPTS, ge=1)

    @field_validator("opponent")
    @classmethod
    def _known_opponent(cls, value: str) -> str:
        name = value.strip().lower()
        if name not in ATTACK_STRATEGIES:
            known = ", ".join(sorted(ATTACK_STRATEGIES))
            raise ValueError(f"unknown opponent {value!r}; expected one of: {known}")
        return name

    @classmethod
    def from_env(cls, **overrides: Any) -> GameSettings:
        """Construct settings from `SALVO_*` env vars; ``overrides`` win."""
        data: dict[str, Any] = {}
        for field_name, env_name in _ENV_FIELDS.items():
            value = os.getenv(env_name)
            if value is not None and value.strip():
                data[field_name] = value.strip()
        data.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**data)


@lru_cache(maxsize=1)
def load_game_settings() -> GameSettings:
    """Load and cache game settings from the environment."""

    return GameSettings.from_env()
