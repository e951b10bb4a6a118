"""Direct-lighting integrator with shadow rays.

This module computes the color seen along a primary ray. There is no
recursion: a hit surface is shaded by the scene's lights only, with no
reflection, refraction or indirect bounces.

For a primary ray that hits object O at distance d:

    hit_point = origin + direction * d
    normal = surface_normal(O, hit_point)
    color = black
    for each light L:
        color += O.color * L.color * light_power(L) * O.albedo / pi
    result = clamp(color)

light_power is the light intensity unconditionally for ambient light. For
any other light a shadow ray is cast from hit_point + normal * shadow_bias
toward the light; the point is lit when nothing is hit or the nearest hit
is at or beyond the light itself, and the power is then the Lambertian
cosine times the intensity at the point.

The color is clamped once after all lights are summed, never in between.
A primary ray that hits nothing returns the sky color unshaded.

Example:
    >>> from fever_ray.camera.pinhole import setup_camera
    >>> from fever_ray.core.integrator import shade
    >>> from fever_ray.scene.presets import create_single_sphere_config
    >>> config = create_single_sphere_config()
    >>> color = shade(config, setup_camera(config).get_ray(400, 300))
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fever_ray.core.color import Color
from fever_ray.core.ray import Ray, ray_at
from fever_ray.core.vector import Point3, Vector3
from fever_ray.materials.lambertian import eval_lambertian, lambert_cosine
from fever_ray.scene.intersection import Intersection, trace
from fever_ray.scene.lights import (
    Light,
    light_color,
    light_direction,
    light_distance,
    light_intensity,
)
from fever_ray.scene.objects import material_of, surface_normal

if TYPE_CHECKING:
    from fever_ray.scene.manager import Config, Scene


def is_in_light(
    scene: Scene,
    light: Light,
    hit_point: Point3,
    normal: Vector3,
    direction_to_light: Vector3,
    shadow_bias: float,
) -> bool:
    """Test whether a surface point can see a light.

    The shadow ray starts slightly above the surface (offset along the
    normal by shadow_bias) to avoid hitting the surface it starts on.

    Args:
        scene: The scene to trace against.
        light: The light being tested.
        hit_point: The surface point.
        normal: The unit surface normal at hit_point.
        direction_to_light: Unit direction from hit_point toward the light.
        shadow_bias: Offset along the normal for the shadow ray origin.

    Returns:
        True when no object lies between the point and the light.
        An occluder at or beyond the light's distance does not block it.
    """
    shadow_ray = Ray(origin=hit_point + normal * shadow_bias, direction=direction_to_light)
    blocker = trace(scene, shadow_ray)
    return blocker is None or blocker.distance >= light_distance(light, hit_point)


def light_power(
    scene: Scene,
    light: Light,
    hit_point: Point3,
    normal: Vector3,
    shadow_bias: float,
) -> float:
    """Compute the power a light delivers to a surface point.

    Args:
        scene: The scene, used for shadow rays.
        light: The light.
        hit_point: The surface point.
        normal: The unit surface normal at hit_point.
        shadow_bias: Offset along the normal for the shadow ray origin.

    Returns:
        The light intensity for ambient light; otherwise the Lambertian
        cosine times the intensity at the point, or 0 when the point is in
        shadow.
    """
    direction_to_light = light_direction(light, hit_point)
    if direction_to_light is None:
        return light_intensity(light, hit_point)

    if not is_in_light(scene, light, hit_point, normal, direction_to_light, shadow_bias):
        return 0.0
    return lambert_cosine(normal, direction_to_light) * light_intensity(light, hit_point)


def get_color(config: Config, ray: Ray, intersection: Intersection) -> Color:
    """Shade a primary ray hit by summing every light's contribution.

    Args:
        config: The render configuration (scene and shadow bias).
        ray: The primary ray.
        intersection: The closest hit of the ray.

    Returns:
        The clamped linear color of the hit point.
    """
    scene = config.scene
    hit_point = ray_at(ray, intersection.distance)
    normal = surface_normal(intersection.object, hit_point)
    material = material_of(intersection.object)
    light_reflected = eval_lambertian(material.albedo)

    color = Color.black()
    for light in scene.lights:
        power = light_power(scene, light, hit_point, normal, config.shadow_bias)
        color = color + material.color * light_color(light) * power * light_reflected

    return color.clamp()


def shade(config: Config, ray: Ray) -> Color:
    """Compute the color seen along a primary ray.

    Args:
        config: The render configuration.
        ray: The primary ray.

    Returns:
        The shaded color of the closest hit, or the sky color on a miss.
    """
    intersection = trace(config.scene, ray)
    if intersection is None:
        return config.scene.sky
    return get_color(config, ray, intersection)
