"""Closed-form ray/primitive intersection.

Every solver returns distances along the ray that are strictly positive;
points behind the ray origin are never reported.
"""
import math

from raytracer.vector import dot


def solve_quadratic(a, b, c):
    """Real roots of a*x^2 + b*x + c = 0, in ascending order.

    Uses the q = -(b + sign(b) * sqrt(disc)) / 2 form so the smaller-magnitude
    root is recovered as c / q instead of by cancellation.
    """
    disc = b * b - 4.0 * a * c
    if disc < 0.0:
        return ()
    if disc == 0.0:
        return (-0.5 * b / a,)
    q = -0.5 * (b + math.copysign(math.sqrt(disc), b))
    r1 = q / a
    r2 = c / q
    return (r1, r2) if r1 <= r2 else (r2, r1)


def positive_roots(*roots):
    return tuple(sorted(t for t in roots if t > 0.0))


def sphere_roots(ray, sphere):
    """All strictly positive distances at which the ray crosses the sphere.

    The discriminant is taken from the squared distance between the centre and
    the ray's closest approach, which stays accurate when the ray origin is far
    from the sphere (Haines & Akenine-Moller, Ray Tracing Gems ch. 7).
    """
    f = ray.origin - sphere.center
    d = ray.direction
    rr = sphere.radius * sphere.radius
    dd = dot(d, d)
    b = -dot(f, d)

    perp = f + (b / dd) * d
    disc = rr - dot(perp, perp)
    if disc < 0.0:
        return ()
    if disc == 0.0:
        # Grazing ray
        return positive_roots(b / dd)

    c = dot(f, f) - rr
    q = b + math.copysign(math.sqrt(dd * disc), b)
    return positive_roots(c / q, q / dd)


def ray_sphere(ray, sphere):
    """Distance to the visible surface of the sphere, or None."""
    roots = sphere_roots(ray, sphere)
    return roots[0] if roots else None


def ray_plane(ray, plane):
    """Distance to the plane, or None when parallel to it or behind the origin."""
    denom = dot(ray.direction, plane.normal)
    if denom == 0.0:
        return None
    t = (dot(plane.origin, plane.normal) - dot(ray.origin, plane.normal)) / denom
    return t if t > 0.0 else None
