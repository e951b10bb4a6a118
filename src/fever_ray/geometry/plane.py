"""Infinite plane primitive.

A plane is stored as a point on the plane (origin) and a unit normal. The
stored normal points away from the side the plane is seen from: a ray
only hits the plane when it travels along the stored normal, i.e. when
dot(normal, direction) is positive. The shading normal is the stored
normal negated, so it faces back toward the viewer.

For a floor seen from above, store normal = (0, -1, 0).
"""

from dataclasses import dataclass

from fever_ray.core.ray import Ray
from fever_ray.core.vector import Point3, Vector3
from fever_ray.materials.lambertian import Material

# Rays whose direction is closer to parallel than this (or facing the back
# side) are treated as misses
PLANE_EPSILON = 1e-6


@dataclass(frozen=True)
class Plane:
    """An infinite plane.

    Attributes:
        origin: Any point on the plane.
        normal: Unit normal pointing away from the visible side.
        material: The surface material.
    """

    origin: Point3
    normal: Vector3
    material: Material


def hit_plane(plane: Plane, ray: Ray) -> float | None:
    """Test for ray-plane intersection.

    Args:
        plane: The plane to test.
        ray: The ray, with a unit-length direction.

    Returns:
        The distance along the ray to the plane, or None when the ray is
        parallel to the plane, approaches its back face, or the plane lies
        behind the ray origin.
    """
    denom = plane.normal.dot(ray.direction)
    if denom > PLANE_EPSILON:
        v = plane.origin - ray.origin
        distance = v.dot(plane.normal) / denom
        if distance >= 0.0:
            return distance
    return None


def plane_normal(plane: Plane, hit_point: Point3) -> Vector3:
    """Return the shading normal, which opposes the stored normal."""
    return -plane.normal
