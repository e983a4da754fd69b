"""
Configuration & Constants
=========================
This module serves as the central registry for data sources and global constants.

Why is this file needed?
------------------------
1. Abstraction: It prevents URLs, model names and tuning constants from being
   scattered throughout the code.
2. Deployment: Values that differ between machines (API key, offline boundary file,
   log level) are read from the environment or a local `.env` file.

Exports:
    BOUNDARIES_URL (str): Default world boundary FeatureCollection.
    GEMINI_MODEL (str): Default generative model used for the GDP dataset.
    Settings / load_settings(): Environment-driven runtime settings.
"""
from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from gdpglobe.logging_config import parse_level

# Data sources
BOUNDARIES_URL: str = "https://raw.githubusercontent.com/holtzy/D3-graph-gallery/master/DATA/world.geojson"
BOUNDARIES_TIMEOUT_S: float = 30.0

GEMINI_MODEL: str = "gemini-2.5-flash"
GDP_PROMPT: str = (
    "Generate a comprehensive dataset of the top 30 countries by estimated nominal GDP for the year 2024. "
    "Provide the rank, country name, ISO Alpha-3 code, GDP in Trillions of USD, estimated growth rate "
    "percentage, and a very brief 1-sentence economic summary."
)

# Globe interaction
INITIAL_ROTATION: tuple[float, float, float] = (0.0, -30.0, 0.0)
ROTATION_SPEED_DEG: float = 0.15  # per animation tick
DRAG_SENSITIVITY: float = 0.25  # degrees per pixel
FRAME_INTERVAL_MS: int = 16

# Side panel
CHART_TOP_N: int = 15


@dataclass(frozen=True)
class Settings:
    """Runtime settings resolved from the environment."""
    api_key: Optional[str] = None
    model: str = GEMINI_MODEL
    boundaries_source: str = BOUNDARIES_URL
    boundaries_timeout: float = BOUNDARIES_TIMEOUT_S
    log_level: int = logging.INFO
    log_file: Optional[str] = None


def parse_timeout(value: Optional[str], default: float = BOUNDARIES_TIMEOUT_S) -> float:
    """Seconds from an environment string; malformed or non-positive values give the default."""
    if not value:
        return default
    try:
        seconds = float(value)
    except ValueError:
        return default
    return seconds if math.isfinite(seconds) and seconds > 0 else default


def load_settings(env: Optional[dict[str, str]] = None) -> Settings:
    """
    Build Settings from environment variables.

    A `.env` file found upward from the working directory is loaded first; values
    already present in the environment take precedence.

    Args:
        env: Mapping to read instead of os.environ (used by tests).
    """
    if env is None:
        load_dotenv(find_dotenv(usecwd=True), override=False)
        env = dict(os.environ)

    timeout = env.get("GDPGLOBE_BOUNDARIES_TIMEOUT")
    return Settings(
        api_key=env.get("GEMINI_API_KEY") or env.get("API_KEY") or None,
        model=env.get("GDPGLOBE_MODEL") or GEMINI_MODEL,
        boundaries_source=env.get("GDPGLOBE_BOUNDARIES") or BOUNDARIES_URL,
        boundaries_timeout=parse_timeout(timeout),
        log_level=parse_level(env.get("GDPGLOBE_LOG_LEVEL")),
        log_file=env.get("GDPGLOBE_LOG_FILE") or None,
    )
