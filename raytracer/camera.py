import math

import numpy as np

from raytracer.constants import DEFAULT_EXPOSURE, DEFAULT_GAMMA
from raytracer.primitives import Ray
from raytracer.vector import UNIT_X, UNIT_Y, UNIT_Z, normalize


class PerspectiveCamera:
    """Pinhole camera looking through a screen door one unit in front of it.

    Screen coordinates run from -1 to 1 on both axes with (0, 0) at the centre
    and y pointing up. ``fov`` is the angle between the forward axis and the
    top edge of the screen door.
    """

    def __init__(
        self,
        position=(0.0, 0.0, 0.0),
        fov=math.pi / 4,
        aspect_ratio=16.0 / 9.0,
        exposure=DEFAULT_EXPOSURE,
        gamma=DEFAULT_GAMMA,
        right=UNIT_X,
        up=UNIT_Y,
        forward=UNIT_Z,
    ):
        self.position = np.array(position, dtype=float)
        self.right = np.array(right, dtype=float)
        self.up = np.array(up, dtype=float)
        self.forward = np.array(forward, dtype=float)
        self.exposure = exposure
        self.gamma = gamma
        self._fov = fov
        self._aspect_ratio = aspect_ratio
        self._update_screen_dimensions()

    def _update_screen_dimensions(self):
        self._half_height = math.tan(self._fov)
        self._half_width = self._half_height * self._aspect_ratio

    @property
    def fov(self):
        return self._fov

    @fov.setter
    def fov(self, value):
        self._fov = value
        self._update_screen_dimensions()

    @property
    def aspect_ratio(self):
        return self._aspect_ratio

    @aspect_ratio.setter
    def aspect_ratio(self, value):
        self._aspect_ratio = value
        self._update_screen_dimensions()

    def move(self, forward=0.0, right=0.0, up=0.0):
        self.position = self.position + self.forward * forward + self.right * right + self.up * up

    def ray_for_screen_coordinate(self, x, y):
        direction = self.forward + self.right * (x * self._half_width) + self.up * (y * self._half_height)
        return Ray(self.position.copy(), normalize(direction))

    def ray_for_sample(self, fx, fy, cols, rows):
        """Ray through a fractional pixel position; (0, 0) is the top-left corner of the image."""
        x = 2.0 * fx / cols - 1.0
        y = -(2.0 * fy / rows - 1.0)
        return self.ray_for_screen_coordinate(x, y)

    def ray_for_pixel(self, col, row, cols, rows):
        # Through the pixel's top-left corner, not its centre
        return self.ray_for_sample(float(col), float(row), cols, rows)
