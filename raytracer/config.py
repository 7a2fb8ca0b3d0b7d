"""Configuration for the ray tracer, read from environment variables."""

import os
from pathlib import Path
from typing import Optional

from raytracer.constants import (
    DEFAULT_EXPOSURE,
    DEFAULT_GAMMA,
    DEFAULT_MAX_DEPTH,
    DEFAULT_RESOLUTION,
    DEFAULT_SAMPLES_PER_AXIS,
    DEFAULT_TILE_SIZE,
)

# Image settings
RENDER_WIDTH = int(os.getenv("RENDER_WIDTH", str(DEFAULT_RESOLUTION[0])))
RENDER_HEIGHT = int(os.getenv("RENDER_HEIGHT", str(DEFAULT_RESOLUTION[1])))
RENDER_SAMPLES_PER_AXIS = int(os.getenv("RENDER_SAMPLES_PER_AXIS", str(DEFAULT_SAMPLES_PER_AXIS)))
RENDER_MAX_DEPTH = int(os.getenv("RENDER_MAX_DEPTH", str(DEFAULT_MAX_DEPTH)))

# Scheduling settings
RENDER_TILE_SIZE = int(os.getenv("RENDER_TILE_SIZE", str(DEFAULT_TILE_SIZE)))
RENDER_WORKERS = int(os.getenv("RENDER_WORKERS", str(os.cpu_count() or 1)))

# Tone settings
RENDER_EXPOSURE = float(os.getenv("RENDER_EXPOSURE", str(DEFAULT_EXPOSURE)))
RENDER_GAMMA = float(os.getenv("RENDER_GAMMA", str(DEFAULT_GAMMA)))

# Paths
OUTPUT_DIR = Path(os.getenv("OUTPUT_DIR", "images"))

# Logging settings
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
LOG_FILE: Optional[Path] = Path(os.environ["LOG_FILE"]) if os.getenv("LOG_FILE") else None

__all__ = [
    "RENDER_WIDTH",
    "RENDER_HEIGHT",
    "RENDER_SAMPLES_PER_AXIS",
    "RENDER_MAX_DEPTH",
    "RENDER_TILE_SIZE",
    "RENDER_WORKERS",
    "RENDER_EXPOSURE",
    "RENDER_GAMMA",
    "OUTPUT_DIR",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_FILE",
]
