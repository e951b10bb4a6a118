"""Scene and render configuration, plus scene description (de)serialisation.

This module owns the boundary between textual scene descriptions (JSON)
and the immutable in-memory structures the renderer consumes:

- Scene: sky color, ordered lights and ordered objects.
- Config: image dimensions, field of view, shadow bias and the scene.

Scene descriptions are validated here. Unknown keys, unknown variant tags,
malformed values and zero-length directions raise SceneFormatError before
any rendering starts.

Example:
    >>> from fever_ray.scene.manager import config_from_dict
    >>> config = config_from_dict({
    ...     "width": 800, "height": 600,
    ...     "scene": {
    ...         "objects": [{"type": "sphere", "center": [0, 0, -5], "radius": 1,
    ...                      "material": {"color": "#FFFFFF", "albedo": 0.5}}],
    ...         "lights": [{"type": "directional", "direction": [0, 0, -1],
    ...                     "color": [1, 1, 1], "intensity": 1.0}],
    ...     },
    ... })
    >>> len(config.scene.objects)
    1
"""

from __future__ import annotations

import json
import logging
import math
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from fever_ray.core.color import Color
from fever_ray.core.vector import Point3, Vector3
from fever_ray.errors import ConfigError, DegenerateVector, SceneFormatError
from fever_ray.geometry.plane import Plane
from fever_ray.geometry.sphere import Sphere
from fever_ray.materials.lambertian import Material
from fever_ray.scene.lights import AmbientLight, DirectionalLight, Light, PointLight
from fever_ray.scene.objects import SceneObject

logger = logging.getLogger(__name__)

# Defaults for optional configuration keys
DEFAULT_WIDTH = 640
DEFAULT_HEIGHT = 480
DEFAULT_FOV = 90.0
DEFAULT_SHADOW_BIAS = 1e-4

# "RRGGBB" or "RRGGBBAA", after an optional leading "#"
_HEX_COLOR = re.compile(r"[0-9A-Fa-f]{6}|[0-9A-Fa-f]{8}")


@dataclass(frozen=True)
class Scene:
    """An immutable scene.

    Attributes:
        sky: Background color returned for rays that hit nothing.
        lights: Lights, applied in order during shading.
        objects: Objects, tested in order during tracing.
    """

    sky: Color = field(default_factory=Color.black)
    lights: tuple[Light, ...] = ()
    objects: tuple[SceneObject, ...] = ()

    def __post_init__(self) -> None:
        # Accept any sequence but store tuples so the scene stays immutable
        object.__setattr__(self, "lights", tuple(self.lights))
        object.__setattr__(self, "objects", tuple(self.objects))


@dataclass(frozen=True)
class Config:
    """Render configuration.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        scene: The scene to render.
        fov: Horizontal field-of-view scale in degrees, in (0, 180).
        shadow_bias: Offset along the surface normal for shadow ray origins.
    """

    width: int
    height: int
    scene: Scene
    fov: float = DEFAULT_FOV
    shadow_bias: float = DEFAULT_SHADOW_BIAS

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ConfigError(
                f"Image dimensions must be positive, got {self.width}x{self.height}"
            )
        if not 0.0 < self.fov < 180.0:
            raise ConfigError(f"Field of view = {self.fov} must be in (0, 180) degrees")
        if not self.shadow_bias > 0.0:
            raise ConfigError(f"Shadow bias = {self.shadow_bias} must be positive")


# =============================================================================
# Value parsing
# =============================================================================


def _check_keys(data: Mapping[str, Any], allowed: set[str], required: set[str], what: str) -> None:
    if not isinstance(data, Mapping):
        raise SceneFormatError(f"{what} must be an object, got {type(data).__name__}")
    unknown = set(data) - allowed
    if unknown:
        raise SceneFormatError(f"Unknown field(s) in {what}: {', '.join(sorted(unknown))}")
    missing = required - set(data)
    if missing:
        raise SceneFormatError(f"Missing field(s) in {what}: {', '.join(sorted(missing))}")


def _parse_number(value: Any, what: str) -> float:
    # bool is an int subclass but never a valid number here
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SceneFormatError(f"{what} must be a number, got {value!r}")
    number = float(value)
    if not math.isfinite(number):
        raise SceneFormatError(f"{what} must be finite, got {value!r}")
    return number


def _parse_triple(value: Any, keys: tuple[str, str, str], what: str) -> tuple[float, float, float]:
    if isinstance(value, Mapping):
        _check_keys(value, set(keys), set(keys), what)
        return (
            _parse_number(value[keys[0]], f"{what}.{keys[0]}"),
            _parse_number(value[keys[1]], f"{what}.{keys[1]}"),
            _parse_number(value[keys[2]], f"{what}.{keys[2]}"),
        )
    if isinstance(value, Sequence) and not isinstance(value, str) and len(value) == 3:
        return (
            _parse_number(value[0], f"{what}[0]"),
            _parse_number(value[1], f"{what}[1]"),
            _parse_number(value[2], f"{what}[2]"),
        )
    raise SceneFormatError(f"{what} must be a list of 3 numbers or an object, got {value!r}")


def _parse_point(value: Any, what: str) -> Point3:
    return Point3(*_parse_triple(value, ("x", "y", "z"), what))


def _parse_direction(value: Any, what: str) -> Vector3:
    vector = Vector3(*_parse_triple(value, ("x", "y", "z"), what))
    try:
        return vector.normalize()
    except DegenerateVector as e:
        raise SceneFormatError(f"{what} must not be a zero-length vector") from e


def parse_color(value: Any, what: str = "color") -> Color:
    """Parse a color from a mapping, a 3-element list or a hex string.

    Hex strings are "#RRGGBB" or "#RRGGBBAA" (alpha ignored).

    Raises:
        SceneFormatError: If the value is not a valid color.
    """
    if isinstance(value, str):
        digits = value[1:] if value.startswith("#") else value
        if not _HEX_COLOR.fullmatch(digits):
            raise SceneFormatError(f"{what} must be a 6 or 8 digit hex color: {value!r}")
        number = int(digits, 16)
        if len(digits) == 6:
            return Color.from_rgb_hex(number)
        return Color.from_rgba_hex(number)
    return Color(*_parse_triple(value, ("red", "green", "blue"), what))


def _parse_material(data: Any, what: str) -> Material:
    _check_keys(data, {"color", "albedo"}, {"color", "albedo"}, what)
    albedo = _parse_number(data["albedo"], f"{what}.albedo")
    if albedo < 0.0:
        raise SceneFormatError(f"{what}.albedo must be non-negative, got {albedo}")
    return Material(color=parse_color(data["color"], f"{what}.color"), albedo=albedo)


def _parse_intensity(data: Mapping[str, Any], what: str) -> float:
    intensity = _parse_number(data["intensity"], f"{what}.intensity")
    if intensity < 0.0:
        raise SceneFormatError(f"{what}.intensity must be non-negative, got {intensity}")
    return intensity


def _variant_type(data: Any, what: str) -> str:
    if not isinstance(data, Mapping):
        raise SceneFormatError(f"{what} must be an object, got {type(data).__name__}")
    kind = data.get("type")
    if not isinstance(kind, str):
        raise SceneFormatError(f"{what} is missing a string 'type' field")
    return kind.lower()


def object_from_dict(data: Any, what: str = "object") -> SceneObject:
    """Build a scene object from its description.

    Raises:
        SceneFormatError: If the description is malformed.
    """
    kind = _variant_type(data, what)
    if kind == "sphere":
        _check_keys(data, {"type", "center", "radius", "material"}, {"center", "radius", "material"}, what)
        radius = _parse_number(data["radius"], f"{what}.radius")
        if radius <= 0.0:
            raise SceneFormatError(f"{what}.radius must be positive, got {radius}")
        return Sphere(
            center=_parse_point(data["center"], f"{what}.center"),
            radius=radius,
            material=_parse_material(data["material"], f"{what}.material"),
        )
    elif kind == "plane":
        _check_keys(data, {"type", "origin", "normal", "material"}, {"origin", "normal", "material"}, what)
        return Plane(
            origin=_parse_point(data["origin"], f"{what}.origin"),
            normal=_parse_direction(data["normal"], f"{what}.normal"),
            material=_parse_material(data["material"], f"{what}.material"),
        )
    raise SceneFormatError(f"Unknown object type in {what}: {data['type']!r}")


def light_from_dict(data: Any, what: str = "light") -> Light:
    """Build a light from its description.

    Raises:
        SceneFormatError: If the description is malformed.
    """
    kind = _variant_type(data, what)
    if kind == "directional":
        _check_keys(data, {"type", "direction", "color", "intensity"}, {"direction", "color", "intensity"}, what)
        return DirectionalLight(
            direction=_parse_direction(data["direction"], f"{what}.direction"),
            color=parse_color(data["color"], f"{what}.color"),
            intensity=_parse_intensity(data, what),
        )
    elif kind == "ambient":
        _check_keys(data, {"type", "color", "intensity"}, {"color", "intensity"}, what)
        return AmbientLight(
            color=parse_color(data["color"], f"{what}.color"),
            intensity=_parse_intensity(data, what),
        )
    elif kind == "point":
        _check_keys(data, {"type", "position", "color", "intensity"}, {"position", "color", "intensity"}, what)
        return PointLight(
            position=_parse_point(data["position"], f"{what}.position"),
            color=parse_color(data["color"], f"{what}.color"),
            intensity=_parse_intensity(data, what),
        )
    raise SceneFormatError(f"Unknown light type in {what}: {data['type']!r}")


def _parse_list(value: Any, what: str) -> list[Any]:
    if not isinstance(value, Sequence) or isinstance(value, str):
        raise SceneFormatError(f"{what} must be a list, got {type(value).__name__}")
    return list(value)


def scene_from_dict(data: Any) -> Scene:
    """Build a Scene from a dictionary with 'sky', 'lights' and 'objects' keys.

    All keys are optional: the sky defaults to black and the lists to empty.

    Raises:
        SceneFormatError: If the description is malformed.
    """
    _check_keys(data, {"sky", "lights", "objects"}, set(), "scene")
    sky = parse_color(data["sky"], "scene.sky") if "sky" in data else Color.black()
    lights = [
        light_from_dict(item, f"scene.lights[{i}]")
        for i, item in enumerate(_parse_list(data.get("lights", []), "scene.lights"))
    ]
    objects = [
        object_from_dict(item, f"scene.objects[{i}]")
        for i, item in enumerate(_parse_list(data.get("objects", []), "scene.objects"))
    ]
    return Scene(sky=sky, lights=tuple(lights), objects=tuple(objects))


def _parse_dimension(value: Any, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise SceneFormatError(f"{what} must be an integer, got {value!r}")
    return value


def config_from_dict(data: Any) -> Config:
    """Build a Config from a dictionary.

    Recognised keys: width, height, fov, shadow_bias, scene. All are
    optional (see the DEFAULT_* constants).

    Raises:
        SceneFormatError: If the description is malformed.
        ConfigError: If the values are well-formed but unusable.
    """
    _check_keys(data, {"width", "height", "fov", "shadow_bias", "scene"}, set(), "config")
    return Config(
        width=_parse_dimension(data.get("width", DEFAULT_WIDTH), "width"),
        height=_parse_dimension(data.get("height", DEFAULT_HEIGHT), "height"),
        fov=_parse_number(data.get("fov", DEFAULT_FOV), "fov"),
        shadow_bias=_parse_number(data.get("shadow_bias", DEFAULT_SHADOW_BIAS), "shadow_bias"),
        scene=scene_from_dict(data.get("scene", {})),
    )


# =============================================================================
# Serialisation
# =============================================================================


def _color_to_dict(color: Color) -> dict[str, float]:
    return {"red": color.red, "green": color.green, "blue": color.blue}


def _material_to_dict(material: Material) -> dict[str, Any]:
    return {"color": _color_to_dict(material.color), "albedo": material.albedo}


def object_to_dict(obj: SceneObject) -> dict[str, Any]:
    """Export a scene object to its description."""
    if isinstance(obj, Sphere):
        return {
            "type": "sphere",
            "center": list(obj.center.to_tuple()),
            "radius": obj.radius,
            "material": _material_to_dict(obj.material),
        }
    elif isinstance(obj, Plane):
        return {
            "type": "plane",
            "origin": list(obj.origin.to_tuple()),
            "normal": list(obj.normal.to_tuple()),
            "material": _material_to_dict(obj.material),
        }
    raise TypeError(f"Unknown object type: {type(obj).__name__}")


def light_to_dict(light: Light) -> dict[str, Any]:
    """Export a light to its description."""
    if isinstance(light, DirectionalLight):
        return {
            "type": "directional",
            "direction": list(light.direction.to_tuple()),
            "color": _color_to_dict(light.color),
            "intensity": light.intensity,
        }
    elif isinstance(light, AmbientLight):
        return {
            "type": "ambient",
            "color": _color_to_dict(light.color),
            "intensity": light.intensity,
        }
    elif isinstance(light, PointLight):
        return {
            "type": "point",
            "position": list(light.position.to_tuple()),
            "color": _color_to_dict(light.color),
            "intensity": light.intensity,
        }
    raise TypeError(f"Unknown light type: {type(light).__name__}")


def scene_to_dict(scene: Scene) -> dict[str, Any]:
    """Export a Scene to a dictionary (for JSON serialisation)."""
    return {
        "sky": _color_to_dict(scene.sky),
        "lights": [light_to_dict(light) for light in scene.lights],
        "objects": [object_to_dict(obj) for obj in scene.objects],
    }


def config_to_dict(config: Config) -> dict[str, Any]:
    """Export a Config to a dictionary (for JSON serialisation)."""
    return {
        "width": config.width,
        "height": config.height,
        "fov": config.fov,
        "shadow_bias": config.shadow_bias,
        "scene": scene_to_dict(config.scene),
    }


# =============================================================================
# Files
# =============================================================================


def load_config(path: str | Path) -> Config:
    """Load a render configuration from a JSON file.

    Raises:
        SceneFormatError: If the file is not valid JSON or describes an
            invalid scene.
        OSError: If the file cannot be read.
    """
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise SceneFormatError(f"{path}: invalid JSON: {e}") from e
    config = config_from_dict(data)
    logger.info(
        "Loaded %s: %dx%d, %d object(s), %d light(s)",
        path,
        config.width,
        config.height,
        len(config.scene.objects),
        len(config.scene.lights),
    )
    return config


def save_config(config: Config, path: str | Path) -> Path:
    """Save a render configuration to a JSON file.

    Returns:
        The path written.
    """
    path = Path(path)
    with path.open("w", encoding="utf-8") as f:
        json.dump(config_to_dict(config), f, indent=2)
    logger.info("Saved configuration to %s", path)
    return path
