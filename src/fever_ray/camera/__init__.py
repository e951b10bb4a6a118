"""Camera module for primary ray generation.

Components:
    pinhole: Fixed pinhole (perspective) camera at the origin looking down -z

Camera responsibilities:
    - Map pixel coordinates (x right, y down) to world-space rays
    - Scale the sensor by the field of view and the aspect ratio
    - Reject image shapes the model cannot handle (width <= height)
"""

from .pinhole import PinholeCamera, create_prime_ray, setup_camera

__all__ = [
    "PinholeCamera",
    "setup_camera",
    "create_prime_ray",
]
