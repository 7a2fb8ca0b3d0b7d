"""Scene container and the recursive Whitted-style tracer."""
import logging
import math
from enum import Enum

import numpy as np

from raytracer.color import BLACK, clamp, correct_gamma
from raytracer.constants import BIAS, DEFAULT_MAX_DEPTH, FRESNEL_EPSILON
from raytracer.intersect import ray_plane, ray_sphere
from raytracer.optics import fresnel_schlick, refract
from raytracer.primitives import DirectionalLight, Intersection, Plane, PointLight, Ray, Sphere
from raytracer.vector import length_sq, reflect

logger = logging.getLogger(__name__)


class ShapeType(Enum):
    NONE = 0
    SPHERE = 1
    PLANE = 2


class Scene:
    """Spheres, planes and lights, plus the background seen by rays that escape.

    Built additively and treated as read-only once rendering starts, so any
    number of render threads may query it at once.
    """

    def __init__(self, background=BLACK):
        self.background = np.array(background, dtype=float)
        self.spheres = []
        self.planes = []
        self.point_lights = []
        self.directional_lights = []

    def add(self, *objects):
        for obj in objects:
            if isinstance(obj, Sphere):
                self.spheres.append(obj)
            elif isinstance(obj, Plane):
                self.planes.append(obj)
            elif isinstance(obj, PointLight):
                self.point_lights.append(obj)
            elif isinstance(obj, DirectionalLight):
                self.directional_lights.append(obj)
            else:
                raise TypeError(f"Cannot add {type(obj).__name__} to a scene")
            logger.debug("Added %r", obj)
        return self

    # ==================================================
    # Intersection
    # ==================================================
    def intersect(self, ray):
        """Nearest intersection along the ray, or None.

        Equal distances keep the earlier primitive: spheres before planes,
        then insertion order.
        """
        min_distance = math.inf
        min_shape = ShapeType.NONE
        min_index = 0

        for i, sphere in enumerate(self.spheres):
            distance = ray_sphere(ray, sphere)
            if distance is not None and distance < min_distance:
                min_distance, min_shape, min_index = distance, ShapeType.SPHERE, i

        for i, plane in enumerate(self.planes):
            distance = ray_plane(ray, plane)
            if distance is not None and distance < min_distance:
                min_distance, min_shape, min_index = distance, ShapeType.PLANE, i

        if min_shape is ShapeType.NONE:
            return None

        shape = self.spheres[min_index] if min_shape is ShapeType.SPHERE else self.planes[min_index]
        point = ray.point(min_distance)
        normal, front_face, tangent, bitangent, uv = shape.surface(point, ray.direction)
        return Intersection(ray, min_distance, normal, tangent, bitangent, uv, shape.material, front_face)

    def transmittance(self, point, light_dir, light_distance=math.inf):
        """Fraction of light reaching ``point`` from ``light_dir`` through transparent occluders."""
        result = 1.0
        origin = point
        remaining = light_distance
        while True:
            hit = self.intersect(Ray(origin, light_dir))
            if hit is None or hit.distance >= remaining:
                return result
            result *= hit.material.transparency
            if result == 0.0:
                return 0.0
            # Step through the surface and keep going
            origin = hit.point() - hit.normal * BIAS
            remaining -= hit.distance

    # ==================================================
    # Shading
    # ==================================================
    def direct_lighting(self, hit, normal, origin):
        material = hit.material
        view_dir = -hit.ray.direction
        color = material.ambient.copy()

        for light in self.point_lights:
            light_vec = light.position - origin
            distance_sq = length_sq(light_vec)
            distance = math.sqrt(distance_sq)
            light_dir = light_vec / distance
            visible = self.transmittance(origin, light_dir, distance)
            if visible > 0.0:
                brdf = material.diffuse_brdf(light_dir, normal, hit.uv) + material.specular_brdf(view_dir, light_dir, normal)
                color += light.color_intensity(distance_sq) * visible * brdf

        for light in self.directional_lights:
            light_dir = -light.direction
            visible = self.transmittance(origin, light_dir)
            if visible > 0.0:
                brdf = material.diffuse_brdf(light_dir, normal, hit.uv) + material.specular_brdf(view_dir, light_dir, normal)
                color += light.color_intensity() * visible * brdf

        return color

    def trace(self, ray, depth=0, max_depth=DEFAULT_MAX_DEPTH):
        """Radiance arriving along the ray, following at most ``max_depth`` bounces."""
        hit = self.intersect(ray)
        if hit is None:
            return self.background.copy()

        material = hit.material
        point = hit.point()
        normal = material.shading_normal(hit.normal, hit.tangent, hit.bitangent, hit.uv)
        origin = point + hit.normal * BIAS

        color = self.direct_lighting(hit, normal, origin)

        if depth < max_depth:
            outward = hit.outward_normal()
            reflectance = fresnel_schlick(ray.direction, outward, material.refractive_index, material.reflectivity)
            transmission = 1.0 - reflectance

            if material.transparency > 0.0 and transmission > FRESNEL_EPSILON:
                direction = refract(ray.direction, outward, material.refractive_index)
                if direction is not None:
                    refracted = Ray(point + direction * BIAS, direction)
                    color += self.trace(refracted, depth + 1, max_depth) * (material.transparency * transmission)

            if reflectance > 0.0:
                reflected = Ray(origin, reflect(ray.direction, hit.normal))
                color += self.trace(reflected, depth + 1, max_depth) * reflectance

        return color

    def pixel_color(self, camera, px, py, width, height, samples_per_axis=1, max_depth=DEFAULT_MAX_DEPTH):
        """Final display color of a pixel, each channel in [0, 1].

        Samples sit at the centres of a regular ``samples_per_axis`` grid inside the pixel.
        """
        n = samples_per_axis
        offsets = [(1 + 2 * k) / (2.0 * n) for k in range(n)]
        total = np.zeros(3)
        for dy in offsets:
            for dx in offsets:
                ray = camera.ray_for_sample(px + dx, py + dy, width, height)
                total += self.trace(ray, 0, max_depth)
        color = total / (n * n)
        return clamp(correct_gamma(color, camera.exposure, 1.0 / camera.gamma))
