"""Light sources.

Three light kinds are supported:

    DirectionalLight: parallel rays from infinitely far away (sunlight).
    AmbientLight: light arriving from everywhere; never occluded.
    PointLight: light radiating from a position, falling off with the
        inverse square of the distance.

Every light answers four questions relative to a surface point:

    light_color(light)                 -> Color
    light_direction(light, point)      -> unit Vector3 toward the light, or
                                          None when no occlusion test applies
    light_intensity(light, point)      -> float
    light_distance(light, point)       -> float (inf for directional/ambient)

As with scene objects, each function handles every light kind explicitly
and raises TypeError for anything else.
"""

import math
from dataclasses import dataclass
from typing import Union

from fever_ray.core.color import Color
from fever_ray.core.vector import Point3, Vector3


def _check_intensity(intensity: float) -> None:
    if intensity < 0.0:
        raise ValueError(f"Light intensity = {intensity} is negative.")


@dataclass(frozen=True)
class DirectionalLight:
    """A light infinitely far away shining in a single direction.

    Attributes:
        direction: Unit vector the light travels along (from the light into
            the scene).
        color: Light color.
        intensity: Non-negative intensity.
    """

    direction: Vector3
    color: Color
    intensity: float

    def __post_init__(self) -> None:
        _check_intensity(self.intensity)


@dataclass(frozen=True)
class AmbientLight:
    """Uniform light reaching every surface regardless of orientation.

    Attributes:
        color: Light color.
        intensity: Non-negative intensity.
    """

    color: Color
    intensity: float

    def __post_init__(self) -> None:
        _check_intensity(self.intensity)


@dataclass(frozen=True)
class PointLight:
    """A light radiating equally in all directions from a position.

    Attributes:
        position: Location of the light.
        color: Light color.
        intensity: Non-negative intensity (total emitted power).
    """

    position: Point3
    color: Color
    intensity: float

    def __post_init__(self) -> None:
        _check_intensity(self.intensity)


Light = Union[DirectionalLight, AmbientLight, PointLight]


def light_color(light: Light) -> Color:
    """Return the color of a light."""
    if isinstance(light, (DirectionalLight, AmbientLight, PointLight)):
        return light.color
    raise TypeError(f"Unknown light type: {type(light).__name__}")


def light_direction(light: Light, hit_point: Point3) -> Vector3 | None:
    """Return the unit direction from a surface point toward the light.

    Returns:
        The direction to the light, or None for ambient light, meaning no
        shadow test applies.

    Raises:
        TypeError: If light is not a known light kind.
    """
    if isinstance(light, DirectionalLight):
        return -light.direction
    elif isinstance(light, AmbientLight):
        return None
    elif isinstance(light, PointLight):
        return (light.position - hit_point).normalize()
    raise TypeError(f"Unknown light type: {type(light).__name__}")


def light_intensity(light: Light, hit_point: Point3) -> float:
    """Return the light intensity arriving at a surface point.

    Point lights fall off as intensity / (4 * pi * r^2) where r is the
    distance from the light to the point. Directional and ambient lights
    do not depend on position.

    Raises:
        TypeError: If light is not a known light kind.
    """
    if isinstance(light, (DirectionalLight, AmbientLight)):
        return light.intensity
    elif isinstance(light, PointLight):
        r2 = (light.position - hit_point).length_squared()
        return light.intensity / (4.0 * math.pi * r2)
    raise TypeError(f"Unknown light type: {type(light).__name__}")


def light_distance(light: Light, hit_point: Point3) -> float:
    """Return the distance from a surface point to the light.

    Occluders at or beyond this distance do not shadow the point.

    Raises:
        TypeError: If light is not a known light kind.
    """
    if isinstance(light, (DirectionalLight, AmbientLight)):
        return math.inf
    elif isinstance(light, PointLight):
        return (light.position - hit_point).length()
    raise TypeError(f"Unknown light type: {type(light).__name__}")
