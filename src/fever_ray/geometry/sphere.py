"""Sphere primitive with geometric ray-sphere intersection.

The intersection uses the geometric (projection) formulation rather than
solving the quadratic directly:

    l = center - origin
    adj = dot(l, direction)           # projection of l onto the ray
    d2 = dot(l, l) - adj^2            # squared distance from center to the ray line

If d2 exceeds radius^2 the ray line misses the sphere. Otherwise the two
roots are adj -/+ sqrt(radius^2 - d2). The nearer root in front of the ray
origin is returned, which is the far root when the origin lies inside the
sphere.

Example:
    >>> from fever_ray.core.color import Color
    >>> from fever_ray.core.ray import Ray
    >>> from fever_ray.core.vector import Point3, Vector3
    >>> from fever_ray.geometry.sphere import Sphere, hit_sphere
    >>> from fever_ray.materials.lambertian import Material
    >>> sphere = Sphere(Point3(0.0, 0.0, -5.0), 1.0, Material(Color.white(), 0.18))
    >>> hit_sphere(sphere, Ray(Point3.zero(), Vector3(0.0, 0.0, -1.0)))
    4.0
"""

import math
from dataclasses import dataclass

from fever_ray.core.ray import Ray
from fever_ray.core.vector import Point3, Vector3
from fever_ray.materials.lambertian import Material


@dataclass(frozen=True)
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere (positive).
        material: The surface material.
    """

    center: Point3
    radius: float
    material: Material

    def __post_init__(self) -> None:
        if self.radius <= 0.0:
            raise ValueError(f"Sphere radius = {self.radius} must be positive.")


def hit_sphere(sphere: Sphere, ray: Ray) -> float | None:
    """Test for ray-sphere intersection.

    Args:
        sphere: The sphere to test.
        ray: The ray, with a unit-length direction.

    Returns:
        The distance along the ray to the nearest intersection in front of
        the origin, or None if the ray misses the sphere or the sphere lies
        entirely behind the origin.
    """
    l = sphere.center - ray.origin
    adj = l.dot(ray.direction)
    d2 = l.dot(l) - adj * adj
    radius2 = sphere.radius * sphere.radius
    if d2 > radius2:
        return None

    thc = math.sqrt(radius2 - d2)
    t0 = adj - thc
    t1 = adj + thc

    if t0 < 0.0 and t1 < 0.0:
        return None
    # Origin inside the sphere: the near root is behind us
    if t0 < 0.0:
        return t1
    return t0


def sphere_normal(sphere: Sphere, hit_point: Point3) -> Vector3:
    """Compute the outward unit normal at a point on the sphere surface."""
    return (hit_point - sphere.center).normalize()
