"""Numeric constants shared by the tracing and shading code."""

import math

# Offset applied to secondary ray origins to avoid self-intersection (shadow acne).
BIAS = 1e-4

# Below this weight a refracted ray is not worth tracing.
FRESNEL_EPSILON = 1e-4

# Refractive index of the medium surrounding every object.
AIR_REFRACTIVE_INDEX = 1.0

INV_PI = 1.0 / math.pi
INV_FOUR_PI = 1.0 / (4.0 * math.pi)

# Rendering defaults
DEFAULT_MAX_DEPTH = 4
DEFAULT_SAMPLES_PER_AXIS = 1
DEFAULT_TILE_SIZE = 20
DEFAULT_EXPOSURE = 1.0
DEFAULT_GAMMA = 2.2
DEFAULT_RESOLUTION = (640, 360)

__all__ = [
    "BIAS",
    "FRESNEL_EPSILON",
    "AIR_REFRACTIVE_INDEX",
    "INV_PI",
    "INV_FOUR_PI",
    "DEFAULT_MAX_DEPTH",
    "DEFAULT_SAMPLES_PER_AXIS",
    "DEFAULT_TILE_SIZE",
    "DEFAULT_EXPOSURE",
    "DEFAULT_GAMMA",
    "DEFAULT_RESOLUTION",
]
