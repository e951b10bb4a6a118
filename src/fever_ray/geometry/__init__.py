"""Geometry module for shape primitives.

Components:
    sphere: Sphere primitive with geometric ray-sphere intersection
    plane: Infinite plane primitive with single-sided intersection

Every primitive module provides a frozen dataclass, a hit function
returning the distance along the ray (or None), and a normal function:

    distance = hit_sphere(sphere, ray)
    normal = sphere_normal(sphere, hit_point)

There is no acceleration structure; scenes are traced by a linear scan
(see fever_ray.scene.intersection).
"""

from .plane import PLANE_EPSILON, Plane, hit_plane, plane_normal
from .sphere import Sphere, hit_sphere, sphere_normal

__all__ = [
    "Sphere",
    "hit_sphere",
    "sphere_normal",
    "Plane",
    "hit_plane",
    "plane_normal",
    "PLANE_EPSILON",
]
