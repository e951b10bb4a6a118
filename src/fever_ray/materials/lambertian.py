"""Lambertian (ideal diffuse) material implementation.

This module implements the Lambertian BRDF, which models ideal diffuse
reflection where incident light is scattered uniformly in all directions
weighted by the cosine of the angle from the surface normal.

The Lambertian BRDF is:
    f_r = albedo / pi

and the cosine term applied per light is:
    max(0, dot(normal, direction_to_light))

Example:
    >>> from fever_ray.core.color import Color
    >>> from fever_ray.materials.lambertian import Material, eval_lambertian
    >>> material = Material(color=Color.white(), albedo=0.18)
    >>> round(eval_lambertian(material.albedo), 5)
    0.0573
"""

import math
from dataclasses import dataclass

from fever_ray.core.color import Color
from fever_ray.core.vector import Vector3


@dataclass(frozen=True)
class Material:
    """Lambertian material properties.

    Attributes:
        color: The surface color (linear RGB) used to filter incoming light.
        albedo: The diffuse reflectance coefficient. Must be non-negative.
    """

    color: Color
    albedo: float

    def __post_init__(self) -> None:
        if self.albedo < 0.0:
            raise ValueError(f"Albedo = {self.albedo} is negative.")


def eval_lambertian(albedo: float) -> float:
    """Evaluate the Lambertian BRDF normalisation, albedo / pi.

    Args:
        albedo: The diffuse reflectance coefficient.

    Returns:
        The fraction of incoming light reflected toward the viewer.
    """
    return albedo / math.pi


def lambert_cosine(normal: Vector3, direction_to_light: Vector3) -> float:
    """Cosine-weighted attenuation for light arriving from a direction.

    Args:
        normal: The unit surface normal.
        direction_to_light: The unit direction from the surface to the light.

    Returns:
        max(0, dot(normal, direction_to_light)).
    """
    return max(0.0, normal.dot(direction_to_light))
