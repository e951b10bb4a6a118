"""Ray data structure.

A ray is an origin point and a unit direction. Primary rays start at the
camera; shadow rays start just above a hit point and head toward a light.

Example:
    >>> from fever_ray.core.ray import Ray, ray_at
    >>> from fever_ray.core.vector import Point3, Vector3
    >>> ray = Ray(origin=Point3.zero(), direction=Vector3(0.0, 0.0, -1.0))
    >>> ray_at(ray, 5.0)
    Point3(x=0.0, y=0.0, z=-5.0)
"""

from dataclasses import dataclass

from fever_ray.core.vector import Point3, Vector3


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction of the ray. Must be unit length; callers
            normalize before constructing the ray.
    """

    origin: Point3
    direction: Vector3


def ray_at(ray: Ray, t: float) -> Point3:
    """Compute the point along the ray at distance t.

    Args:
        ray: The ray to evaluate.
        t: The distance along the ray. Positive values are in front of the origin.

    Returns:
        The point ray.origin + ray.direction * t.
    """
    return ray.origin + ray.direction * t
