"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support,
e.g. ``THEO_GAME__TUNING=night`` or ``THEO_GAME__REDUCED_MOTION=true``.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from theorunner.engine.tuning import Tuning, get_tuning


class DisplaySettings(BaseSettings):
    """Display-related settings."""

    # Play field in simulation units
    field_width: int = Field(default=800, gt=0)
    field_height: int = Field(default=400, gt=0)

    # Window
    scale: int = Field(default=1, ge=1, le=4)
    fps: int = Field(default=60, ge=1, le=240)
    fullscreen: bool = False


class GameSettings(BaseSettings):
    """Gameplay settings."""

    tuning: Literal["classic", "night"] = "classic"

    # Accessibility: disables screen shake
    reduced_motion: bool = False

    sound_enabled: bool = True
    sfx_volume: float = Field(default=1.0, ge=0.0, le=1.0)

    best_score_path: Path = Field(
        default_factory=lambda: Path.home() / ".theo_runner" / "best_score.json"
    )


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="THEO_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = False

    # Nested settings
    display: DisplaySettings = Field(default_factory=DisplaySettings)
    game: GameSettings = Field(default_factory=GameSettings)

    @property
    def tuning(self) -> Tuning:
        """Resolved tuning preset."""
        return get_tuning(self.game.tuning)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
