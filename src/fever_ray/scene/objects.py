"""Dispatch over the closed set of scene object kinds.

A scene object is exactly one of the primitive types listed in
SceneObject. Each operation below handles every kind explicitly and raises
TypeError for anything else, so adding a primitive means updating every
function in this module.
"""

from typing import Union

from fever_ray.core.ray import Ray
from fever_ray.core.vector import Point3, Vector3
from fever_ray.geometry.plane import Plane, hit_plane, plane_normal
from fever_ray.geometry.sphere import Sphere, hit_sphere, sphere_normal
from fever_ray.materials.lambertian import Material

SceneObject = Union[Sphere, Plane]


def intersection(obj: SceneObject, ray: Ray) -> float | None:
    """Intersect a ray with any scene object.

    Returns:
        The distance to the nearest hit in front of the ray origin, or None.

    Raises:
        TypeError: If obj is not a known object kind.
    """
    if isinstance(obj, Sphere):
        return hit_sphere(obj, ray)
    elif isinstance(obj, Plane):
        return hit_plane(obj, ray)
    raise TypeError(f"Unknown object type: {type(obj).__name__}")


def surface_normal(obj: SceneObject, hit_point: Point3) -> Vector3:
    """Compute the unit shading normal of any scene object at a surface point.

    Raises:
        TypeError: If obj is not a known object kind.
    """
    if isinstance(obj, Sphere):
        return sphere_normal(obj, hit_point)
    elif isinstance(obj, Plane):
        return plane_normal(obj, hit_point)
    raise TypeError(f"Unknown object type: {type(obj).__name__}")


def material_of(obj: SceneObject) -> Material:
    """Return the material of any scene object.

    Raises:
        TypeError: If obj is not a known object kind.
    """
    if isinstance(obj, (Sphere, Plane)):
        return obj.material
    raise TypeError(f"Unknown object type: {type(obj).__name__}")
