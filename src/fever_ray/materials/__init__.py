"""Materials module.

Components:
    lambertian: Ideal diffuse material (color + albedo) and its BRDF terms
"""

from .lambertian import Material, eval_lambertian, lambert_cosine

__all__ = [
    "Material",
    "eval_lambertian",
    "lambert_cosine",
]
