import math

import numpy as np

from raytracer.color import WHITE
from raytracer.constants import INV_FOUR_PI, INV_PI
from raytracer.material import DEFAULT
from raytracer.vector import UNIT_X, UNIT_Z, cross, dot, normalize

# ==================================================
# Rays
# ==================================================
class Ray:
    __slots__ = ("origin", "direction")

    def __init__(self, origin, direction):
        self.origin = np.asarray(origin, dtype=float)
        self.direction = np.asarray(direction, dtype=float)

    def point(self, distance):
        return self.origin + self.direction * distance

    def __repr__(self):
        return f"Ray(origin={self.origin.tolist()}, direction={self.direction.tolist()})"

# ==================================================
# Texture Mapping
# ==================================================
def spherical_uv(direction):
    """UV for a unit direction from a sphere's centre to its surface."""
    u = 0.5 + 0.5 * math.atan2(direction[2], direction[0]) * INV_PI
    v = 0.5 - math.asin(max(-1.0, min(1.0, direction[1]))) * INV_PI
    return (u, v)

def orient(normal, incident):
    # Face the normal against the incoming ray; the flag is False when it had to flip
    if dot(incident, normal) <= 0.0:
        return normal, True
    return -normal, False

# ==================================================
# Scene Objects
# ==================================================
class Sphere:
    def __init__(self, center, radius, material=DEFAULT):
        self.center = np.array(center, dtype=float)
        self.radius = float(radius)
        self.material = material

    def outward_normal(self, point):
        return (point - self.center) / self.radius

    def reflective_normal(self, point, incident):
        return orient(self.outward_normal(point), incident)

    def uv(self, point):
        return spherical_uv(self.outward_normal(point))

    def tangent_frame(self, outward):
        # Tangent follows increasing u around the y axis, bitangent increasing v
        tangent = np.array([-outward[2], 0.0, outward[0]])
        if dot(tangent, tangent) == 0.0:
            tangent = UNIT_X.copy()  # at the poles
        tangent = normalize(tangent)
        return tangent, cross(outward, tangent)

    def surface(self, point, incident):
        """(normal, front_face, tangent, bitangent, uv) at a point on the sphere."""
        outward = self.outward_normal(point)
        normal, front_face = orient(outward, incident)
        tangent, bitangent = self.tangent_frame(outward)
        return normal, front_face, tangent, bitangent, spherical_uv(outward)

    def __repr__(self):
        return f"Sphere(center={self.center.tolist()}, radius={self.radius})"


class Plane:
    def __init__(self, origin, normal, material=DEFAULT, axis=None):
        self.origin = np.array(origin, dtype=float)
        self.normal = normalize(np.array(normal, dtype=float))
        if axis is None:
            axis = UNIT_Z if abs(dot(self.normal, UNIT_X)) > 0.9 else UNIT_X
        axis = np.array(axis, dtype=float)
        # Keep the first axis in the plane even if the caller's was not
        self.first_axis = normalize(axis - dot(axis, self.normal) * self.normal)
        self.second_axis = cross(self.normal, self.first_axis)
        self.material = material

    def reflective_normal(self, incident):
        return orient(self.normal, incident)

    def uv(self, point):
        offset = point - self.origin
        return (dot(offset, self.first_axis), dot(offset, self.second_axis))

    def surface(self, point, incident):
        normal, front_face = self.reflective_normal(incident)
        return normal, front_face, self.first_axis, self.second_axis, self.uv(point)

    def __repr__(self):
        return f"Plane(origin={self.origin.tolist()}, normal={self.normal.tolist()})"

# ==================================================
# Lights
# ==================================================
class PointLight:
    def __init__(self, position, color=WHITE, intensity=1.0):
        self.position = np.array(position, dtype=float)
        self.color = np.array(color, dtype=float)
        self.intensity = float(intensity)

    def color_intensity(self, distance_sq):
        # Radiant power spread over a sphere: inverse square law
        return self.color * (self.intensity * INV_FOUR_PI / distance_sq)


class DirectionalLight:
    def __init__(self, direction, color=WHITE, intensity=1.0):
        self.direction = normalize(np.array(direction, dtype=float))
        self.color = np.array(color, dtype=float)
        self.intensity = float(intensity)

    def color_intensity(self):
        return self.color * self.intensity

# ==================================================
# Intersections
# ==================================================
class Intersection:
    """Nearest hit of a ray: surface frame, texture coordinates and material.

    ``normal`` always faces against the ray; ``front_face`` is False when the
    ray struck the inside (or underside) of the surface.
    """

    __slots__ = ("ray", "distance", "normal", "tangent", "bitangent", "uv", "material", "front_face")

    def __init__(self, ray, distance, normal, tangent, bitangent, uv, material, front_face=True):
        self.ray = ray
        self.distance = distance
        self.normal = normal
        self.tangent = tangent
        self.bitangent = bitangent
        self.uv = uv
        self.material = material
        self.front_face = front_face

    def point(self):
        return self.ray.point(self.distance)

    def outward_normal(self):
        return self.normal if self.front_face else -self.normal
