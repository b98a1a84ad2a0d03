"""
Dice Rogue - Battle Settings

Loads configuration from environment variables (prefix DICEROGUE_) using
Pydantic Settings, and configures logging for the engine.
"""

import logging
from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class BattleSettings(BaseSettings):
    """Battle rules and application settings loaded from environment variables."""

    # Pool and hands
    pool_size: int = Field(default=8, ge=1)
    max_hand_size: int = Field(default=5, ge=1)
    max_rolls_per_hand: int = Field(default=3, ge=1)
    max_hands_per_cycle: int = Field(default=5, ge=1)
    cooldown_turns: int = Field(default=1, ge=0)

    # Randomness
    seed: int | None = None

    # Application
    debug: bool = False
    log_level: str = "INFO"

    model_config = {
        "env_prefix": "DICEROGUE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @model_validator(mode="after")
    def _hand_fits_pool(self) -> "BattleSettings":
        if self.max_hand_size > self.pool_size:
            raise ValueError(
                f"max_hand_size ({self.max_hand_size}) cannot exceed pool_size ({self.pool_size})."
            )
        return self


@lru_cache(maxsize=1)
def get_settings() -> BattleSettings:
    """Cached singleton settings instance."""
    return BattleSettings()


def configure_logging(settings: BattleSettings | None = None) -> None:
    """Apply the configured log level to the root logger."""
    settings = settings or get_settings()
    level = logging.DEBUG if settings.debug else settings.log_level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("dicerogue").setLevel(level)
