"""Core configuration and constants.

Uses environment variables for configuration. Follows PEP8 and Google style docstrings.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Literal
import os

from pydantic import BaseModel, Field

# Lunge posture defaults (degrees, smoothing weight)
TARGET_ANGLE = 90.0
ANGLE_TOLERANCE = 21.0
PROGRESS_SMOOTHING_FACTOR = 0.7


class Settings(BaseModel):
    """Application settings loaded from environment variables.

    Attributes:
        app_name: App display name.
        environment: Runtime environment.
        api_host: Host for FastAPI server.
        api_port: Port for FastAPI server.
        log_level: Logging level string.
        lunge_target_angle: Hip/knee angle (degrees) that defines the lunge posture.
        lunge_angle_tolerance: Max deviation (exclusive) from the target still counted as a lunge.
        lunge_progress_smoothing: Weight of the previous progress value in the moving average.
    """

    app_name: str = "Lunge Rep Counter"
    environment: Literal["dev", "prod", "test"] = os.getenv("ENVIRONMENT", "dev")  # type: ignore[assignment]

    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))

    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    exposed_origins: list[str] = (
        os.getenv("EXPOSED_ORIGINS", "*").split(",") if os.getenv("EXPOSED_ORIGINS") else ["*"]
    )

    # Lunge classification
    lunge_target_angle: float = float(os.getenv("LUNGE_TARGET_ANGLE", str(TARGET_ANGLE)))
    lunge_angle_tolerance: float = Field(default=float(os.getenv("LUNGE_ANGLE_TOLERANCE", str(ANGLE_TOLERANCE))), gt=0.0)
    lunge_progress_smoothing: float = Field(
        default=float(os.getenv("LUNGE_PROGRESS_SMOOTHING", str(PROGRESS_SMOOTHING_FACTOR))), ge=0.0, lt=1.0
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()
