"""Pinhole camera model for perspective projection ray generation.

The camera is fixed at the world origin looking down -z with +y up. There
is no camera transform and no depth of field.

For pixel (x, y) the ray passes through the pixel's center:

    ndc_x = (x + 0.5) / width * 2 - 1          # -1 at the left edge, +1 at the right
    ndc_y = 1 - (y + 0.5) / height * 2         # +1 at the top edge, -1 at the bottom
    sensor_x = ndc_x * aspect_ratio * fov_adjustment
    sensor_y = ndc_y * fov_adjustment
    direction = normalize((sensor_x, sensor_y, -1))

where aspect_ratio = width / height and fov_adjustment = tan(fov / 2).
The aspect correction is applied to x, so the image must be wider than it
is tall.

Example:
    >>> from fever_ray.camera.pinhole import PinholeCamera
    >>> camera = PinholeCamera(width=800, height=600, fov=90.0)
    >>> ray = camera.get_ray(400, 300)  # Ray just below-right of image center
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from fever_ray.core.ray import Ray
from fever_ray.core.vector import Point3, Vector3
from fever_ray.errors import InvalidAspectRatio

if TYPE_CHECKING:
    from fever_ray.scene.manager import Config


@dataclass(frozen=True)
class PinholeCamera:
    """Configuration for a pinhole (perspective) camera.

    Attributes:
        width: Image width in pixels. Must be greater than height.
        height: Image height in pixels.
        fov: Field of view in degrees.

    Raises:
        InvalidAspectRatio: If width <= height.
    """

    width: int
    height: int
    fov: float

    def __post_init__(self) -> None:
        if self.width <= self.height:
            raise InvalidAspectRatio(self.width, self.height)

    @property
    def fov_adjustment(self) -> float:
        """Sensor scale factor tan(fov / 2)."""
        return math.tan(math.radians(self.fov) / 2.0)

    @property
    def aspect_ratio(self) -> float:
        """Width divided by height."""
        return self.width / self.height

    def sensor_coordinates(self, x: int, y: int) -> tuple[float, float]:
        """Compute the sensor-plane coordinates of a pixel center.

        Args:
            x: Pixel column (0 = left).
            y: Pixel row (0 = top).

        Returns:
            (sensor_x, sensor_y) on the image plane at z = -1.
        """
        fov_adjustment = self.fov_adjustment
        ndc_x = (x + 0.5) / self.width * 2.0 - 1.0
        ndc_y = 1.0 - (y + 0.5) / self.height * 2.0
        return (ndc_x * self.aspect_ratio * fov_adjustment, ndc_y * fov_adjustment)

    def get_ray(self, x: int, y: int) -> Ray:
        """Generate the primary ray through the center of pixel (x, y).

        Args:
            x: Pixel column (0 = left).
            y: Pixel row (0 = top).

        Returns:
            A Ray from the origin with a unit direction.
        """
        sensor_x, sensor_y = self.sensor_coordinates(x, y)
        return Ray(
            origin=Point3.zero(),
            direction=Vector3(sensor_x, sensor_y, -1.0).normalize(),
        )


def setup_camera(config: Config) -> PinholeCamera:
    """Create the camera for a render configuration.

    This is the fail-fast check for the image shape and must be called
    before any pixel work starts.

    Raises:
        InvalidAspectRatio: If config.width <= config.height.
    """
    return PinholeCamera(width=config.width, height=config.height, fov=config.fov)


def create_prime_ray(x: int, y: int, config: Config) -> Ray:
    """Generate the primary ray for pixel (x, y) of a configuration.

    Convenience wrapper around setup_camera(config).get_ray(x, y). Prefer
    building the camera once when generating many rays.
    """
    return setup_camera(config).get_ray(x, y)
