import numpy as np

# ==================================================
# Color Utilities
# ==================================================
# Colors are linear RGB float arrays; channels are only clamped on output.

def rgb(r, g, b):
    return np.array([r, g, b], dtype=float)

def grey(value):
    return rgb(value, value, value)

def clamp(color, low=0.0, high=1.0):
    return np.clip(color, low, high)

def correct_gamma(color, exposure, inv_gamma):
    return np.power(np.maximum(color * exposure, 0.0), inv_gamma)

def to_rgb8(color):
    # Truncates, so 1.0 maps to 255 and anything below 1/255 to 0
    return (clamp(color) * 255).astype(np.uint8)

BLACK = rgb(0.0, 0.0, 0.0)
WHITE = rgb(1.0, 1.0, 1.0)
