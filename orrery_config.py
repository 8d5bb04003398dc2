"""
orrery_config.py

Constants for the orrery window and canvas, plus environment overrides.

Environment variables (also read from a .env file):
    EXO_WIDTH, EXO_HEIGHT   window size in pixels
    EXO_FPS                 frame rate cap
    EXO_RADIUS_SCALE        pixels per solar radius
    EXO_ORBIT_SCALE         pixels per AU
    EXO_LOG_LEVEL           logging level name
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from physical_scale import ORBIT_SCALE, RADIUS_SCALE, ScaleConfig

# --- Window ---
SCREEN_WIDTH = 1200
SCREEN_HEIGHT = 700
FPS = 60

# Fraction of the half-width the largest orbit may fill
VIEWPORT_MARGIN = 0.95

# --- Colors ---
SPACE = (0, 0, 0)
ORBIT = (255, 255, 255)
FOCUS_ORBIT = (0, 195, 148)
SCALE_ORBIT = (0, 0, 255)
LABEL = (255, 255, 255)
FOCUS_HALO = (255, 240, 240, 178)  # 70% opacity
FOCUS_HALO_WIDTH = 2

# --- Reference orbit label ---
SCALE_ORBIT_LABEL = "Earth's Orbit"
SCALE_ORBIT_LABEL_OFFSET = 560
LABEL_FONT = "helvetica"
LABEL_FONT_SIZE = 24

# --- Info panel ---
PANEL_FONT = "consolas"
PANEL_FONT_SIZE = 15
PANEL_TEXT = (220, 220, 220)
PANEL_SELECTED = FOCUS_ORBIT
HELP_TEXT = (150, 150, 150)


class Settings(BaseSettings):
    """Window, frame rate, display scale and log level, overridable from the environment."""

    model_config = SettingsConfigDict(
        env_prefix="EXO_",
        env_file=".env",
        extra="ignore",
        frozen=True,
    )

    width: int = Field(default=SCREEN_WIDTH, gt=0)
    height: int = Field(default=SCREEN_HEIGHT, gt=0)
    fps: int = Field(default=FPS, gt=0)
    radius_scale: float = Field(default=RADIUS_SCALE, gt=0)
    orbit_scale: float = Field(default=ORBIT_SCALE, gt=0)
    log_level: str = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return str(value).strip().upper()

    @property
    def scale(self) -> ScaleConfig:
        return ScaleConfig(radius_scale=self.radius_scale, orbit_scale=self.orbit_scale)

    def with_overrides(self, **overrides) -> "Settings":
        """Copy with the given fields replaced, validated like the environment."""
        return type(self).model_validate({**self.model_dump(), **overrides})
