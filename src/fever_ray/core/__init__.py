"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    vector: Vector3 and Point3 arithmetic
    color: Linear-light colors and gamma-correct display conversion
    ray: Ray data structure
    integrator: Per-pixel shading with shadow rays
    dispatcher: Parallel fan-out of pixel shading over a thread pool
    taichi_backend: Optional Taichi kernel that shades all pixels in parallel
"""

from .color import GAMMA, Color, gamma_decode, gamma_encode
from .ray import Ray, ray_at
from .vector import Point3, Vector3

# Note: integrator and dispatcher are NOT imported here to avoid circular imports
# with the scene package. Import them directly from fever_ray.core.integrator or
# fever_ray.core.dispatcher when needed.

__all__ = [
    "Vector3",
    "Point3",
    "Color",
    "GAMMA",
    "gamma_encode",
    "gamma_decode",
    "Ray",
    "ray_at",
]
