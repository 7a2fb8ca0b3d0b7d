import math

from raytracer.constants import AIR_REFRACTIVE_INDEX
from raytracer.vector import dot

# ==================================================
# Refraction
# ==================================================
def _interface(incident, normal, refractive_index):
    # cos of the incident angle and the (outside, inside) indices, swapped when leaving the medium
    cos_i = max(-1.0, min(1.0, dot(incident, normal)))
    eta_i, eta_t = AIR_REFRACTIVE_INDEX, refractive_index
    if cos_i < 0.0:
        return -cos_i, eta_i, eta_t, normal
    return cos_i, eta_t, eta_i, -normal

def refract(incident, normal, refractive_index):
    """Snell's law transmission direction, or None on total internal reflection.

    ``normal`` is the outward surface normal; ``incident`` and the result are unit length.
    """
    cos_i, eta_i, eta_t, n = _interface(incident, normal, refractive_index)
    ratio = eta_i / eta_t
    k = 1.0 - ratio * ratio * (1.0 - cos_i * cos_i)
    if k <= 0.0:
        return None
    return incident * ratio + n * (ratio * cos_i - math.sqrt(k))

def fresnel_schlick(incident, normal, refractive_index, reflectivity=0.0):
    """Fraction of light reflected at the surface (Schlick's approximation).

    The base reflectance never drops below the material's own reflectivity.
    """
    cos_i, eta_i, eta_t, _ = _interface(incident, normal, refractive_index)
    r0 = ((eta_i - eta_t) / (eta_i + eta_t)) ** 2
    r0 = max(reflectivity, r0)
    return r0 + (1.0 - r0) * (1.0 - cos_i) ** 5
