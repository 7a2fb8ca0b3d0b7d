"""Surface materials and the BRDF terms evaluated during shading."""
from dataclasses import dataclass, field, replace
from typing import Any, Optional, Tuple

import numpy as np

from raytracer.color import grey
from raytracer.constants import INV_PI
from raytracer.vector import dot, normalize


@dataclass(frozen=True, eq=False)
class Material:
    ambient: np.ndarray = field(default_factory=lambda: grey(0.005))
    diffuse: np.ndarray = field(default_factory=lambda: grey(0.6))
    specular: np.ndarray = field(default_factory=lambda: grey(1.0))
    albedo: float = 1.0
    shininess: float = 25.0
    reflectivity: float = 0.0
    transparency: float = 0.0
    refractive_index: float = 1.0
    tiling: Tuple[float, float] = (1.0, 1.0)
    diffuse_map: Optional[Any] = None
    normal_map: Optional[Any] = None

    def __post_init__(self):
        for name in ("ambient", "diffuse", "specular"):
            value = np.array(getattr(self, name), dtype=float)
            value.flags.writeable = False
            object.__setattr__(self, name, value)

    def with_(self, **changes):
        return replace(self, **changes)

    def diffuse_color(self, uv):
        if self.diffuse_map is None:
            return self.diffuse
        return self.diffuse_map.bilinear_filtered_color(uv, self.tiling)

    def diffuse_brdf(self, light_dir, normal, uv):
        """Lambertian term, already multiplied by the cosine factor."""
        return self.diffuse_color(uv) * (self.albedo * INV_PI) * max(0.0, dot(light_dir, normal))

    def specular_brdf(self, view_dir, light_dir, normal):
        """Blinn-Phong term around the half vector of view and light."""
        half = normalize(view_dir + light_dir)
        return self.specular * max(0.0, dot(half, normal)) ** self.shininess

    def tangent_space_normal(self, uv):
        # Map channels from [0, 1] to [-1, 1]; image rows grow downwards, so flip green
        c = self.normal_map.bilinear_filtered_color(uv, self.tiling)
        return normalize(np.array([2.0 * c[0] - 1.0, 1.0 - 2.0 * c[1], 2.0 * c[2] - 1.0]))

    def shading_normal(self, normal, tangent, bitangent, uv):
        if self.normal_map is None:
            return normal
        n = self.tangent_space_normal(uv)
        return normalize(tangent * n[0] + bitangent * n[1] + normal * n[2])


DEFAULT = Material()
MIRROR = Material(diffuse=grey(0.05), reflectivity=0.95, shininess=200.0)
GLASS = Material(diffuse=grey(0.05), transparency=0.9, refractive_index=1.5, shininess=150.0)
