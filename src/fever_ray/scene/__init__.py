"""Scene module for scene representation and ray-scene queries.

Components:
    objects: Dispatch over the object kinds (sphere, plane)
    lights: Directional, ambient and point lights
    intersection: Closest-hit tracing over all scene objects
    manager: Scene and Config types, scene description loading/saving
    presets: Ready-made render configurations

Scenes are immutable for the duration of a render and are shared by
reference between all rendering workers.
"""

from .intersection import Intersection, trace
from .lights import (
    AmbientLight,
    DirectionalLight,
    Light,
    PointLight,
    light_color,
    light_direction,
    light_distance,
    light_intensity,
)
from .manager import (
    DEFAULT_FOV,
    DEFAULT_HEIGHT,
    DEFAULT_SHADOW_BIAS,
    DEFAULT_WIDTH,
    Config,
    Scene,
    config_from_dict,
    config_to_dict,
    load_config,
    parse_color,
    save_config,
    scene_from_dict,
    scene_to_dict,
)
from .objects import SceneObject, intersection, material_of, surface_normal
from .presets import create_demo_config, create_single_sphere_config

__all__ = [
    # Objects
    "SceneObject",
    "intersection",
    "surface_normal",
    "material_of",
    # Lights
    "Light",
    "DirectionalLight",
    "AmbientLight",
    "PointLight",
    "light_color",
    "light_direction",
    "light_intensity",
    "light_distance",
    # Tracing
    "Intersection",
    "trace",
    # Manager
    "Scene",
    "Config",
    "config_from_dict",
    "config_to_dict",
    "scene_from_dict",
    "scene_to_dict",
    "load_config",
    "save_config",
    "parse_color",
    "DEFAULT_WIDTH",
    "DEFAULT_HEIGHT",
    "DEFAULT_FOV",
    "DEFAULT_SHADOW_BIAS",
    # Presets
    "create_single_sphere_config",
    "create_demo_config",
]
