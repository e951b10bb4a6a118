"""Scene-level ray intersection.

trace() tests a ray against every object in the scene and keeps the
closest hit. This is a linear scan with no acceleration structure, so the
cost per ray grows with the object count.

Example:
    >>> from fever_ray.scene.intersection import trace
    >>> hit = trace(scene, ray)
    >>> if hit is not None:
    ...     print(hit.distance, hit.object)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from fever_ray.core.ray import Ray
from fever_ray.scene.objects import SceneObject, intersection

if TYPE_CHECKING:
    from fever_ray.scene.manager import Scene


@dataclass(frozen=True)
class Intersection:
    """Record of the closest ray-scene intersection.

    Attributes:
        distance: Distance along the ray to the hit (non-negative).
        object: The scene object that was hit. Borrowed from the scene.
    """

    distance: float
    object: SceneObject


def trace(scene: Scene, ray: Ray) -> Intersection | None:
    """Find the nearest object hit by a ray.

    Ties are broken in favour of the object that comes first in
    scene.objects.

    Args:
        scene: The scene to trace against.
        ray: The ray, with a unit-length direction.

    Returns:
        The closest Intersection, or None if no object is hit.
    """
    closest: Intersection | None = None
    for obj in scene.objects:
        distance = intersection(obj, ray)
        if distance is None:
            continue
        if closest is None or distance < closest.distance:
            closest = Intersection(distance, obj)
    return closest
