"""
Whitted-style ray tracer: spheres and planes, point and directional lights,
Blinn-Phong materials with mipmapped diffuse and normal maps, shadows through
transparent occluders, and Fresnel-weighted reflection and refraction.
"""

__version__ = "0.1.0"

from .camera import PerspectiveCamera
from .color import BLACK, WHITE, rgb
from .material import DEFAULT, GLASS, MIRROR, Material
from .primitives import DirectionalLight, Intersection, Plane, PointLight, Ray, Sphere
from .render import CancellationToken, Renderer, RenderPass, RenderSettings
from .scene import Scene
from .texture import Texture
from .vector import vec3

__all__ = [
    "PerspectiveCamera",
    "BLACK",
    "WHITE",
    "rgb",
    "DEFAULT",
    "GLASS",
    "MIRROR",
    "Material",
    "DirectionalLight",
    "Intersection",
    "Plane",
    "PointLight",
    "Ray",
    "Sphere",
    "CancellationToken",
    "Renderer",
    "RenderPass",
    "RenderSettings",
    "Scene",
    "Texture",
    "vec3",
]
