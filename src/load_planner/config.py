"""Runtime settings; loads .env locally via python-dotenv."""

from __future__ import annotations

import logging
import os
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Does not override variables already set in the environment
load_dotenv()

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Centimetres per caller length unit
CM_PER_UNIT: dict[str, float] = {
    "mm": 0.1,
    "cm": 1.0,
    "m": 100.0,
    "in": 2.54,
}


class Settings(BaseModel):
    """Engine and surface settings."""

    max_generated_units: int = Field(
        default=1000,
        ge=1,
        description="Hard cap on pallets/containers generated per candidate plan",
    )
    length_unit: Literal["mm", "cm", "m", "in"] = Field(
        default="cm",
        description="Unit of every length passed to the engine",
    )
    log_level: str = Field(default="INFO", description="Logging level name")
    cors_origins: list[str] = Field(default_factory=lambda: ["*"], description="Origins allowed by the API")

    @property
    def cm_per_unit(self) -> float:
        return CM_PER_UNIT[self.length_unit]


def get_settings() -> Settings:
    """Build settings from LOAD_PLANNER_* environment variables."""
    return Settings(
        max_generated_units=int(os.getenv("LOAD_PLANNER_MAX_UNITS", "1000")),
        length_unit=os.getenv("LOAD_PLANNER_LENGTH_UNIT", "cm").strip().lower(),
        log_level=os.getenv("LOAD_PLANNER_LOG_LEVEL", "INFO").strip().upper(),
        cors_origins=[
            origin.strip()
            for origin in os.getenv("LOAD_PLANNER_CORS_ORIGINS", "*").split(",")
            if origin.strip()
        ],
    )


def configure_logging(level: str | None = None) -> None:
    """Install a basic stream handler for command-line use."""
    if level is None:
        level = get_settings().log_level
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
