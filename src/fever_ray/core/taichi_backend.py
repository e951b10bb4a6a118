"""Taichi kernel backend for data-parallel rendering.

This module runs the same shading pipeline as fever_ray.core.integrator,
but inside a single Taichi kernel whose outermost loop over (y, x) is
parallelised by Taichi across CPU threads.

The scene is uploaded into Structure-of-Arrays Taichi fields. Object and
light kinds are stored as integer tags and every Taichi function branches
on the tag for each kind:

    OBJECT_SPHERE, OBJECT_PLANE
    LIGHT_DIRECTIONAL, LIGHT_AMBIENT, LIGHT_POINT

All arithmetic is float64. Taichi must be initialised with
default_fp=ti.f64 before the first render, so literals in the kernel are
float64 as well; init_taichi() does this:

    >>> from fever_ray.core.taichi_backend import init_taichi, render_taichi
    >>> init_taichi()
    >>> from fever_ray.scene.presets import create_demo_config
    >>> image = render_taichi(create_demo_config(320, 240))

The kernel writes clamped linear colors into a NumPy array; the host then
applies the vectorised gamma encoding from fever_ray.preview.export. The
result matches the Python dispatcher within one 8-bit step per channel.
"""

import logging
import time
from typing import TYPE_CHECKING, Any

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from fever_ray.camera.pinhole import setup_camera
from fever_ray.geometry.plane import PLANE_EPSILON, Plane
from fever_ray.geometry.sphere import Sphere
from fever_ray.preview.export import linear_to_uint8
from fever_ray.scene.lights import AmbientLight, DirectionalLight, PointLight

if TYPE_CHECKING:
    from fever_ray.scene.manager import Config, Scene

logger = logging.getLogger(__name__)

# Type alias for float64 3D vectors
vec3 = ti.types.vector(3, ti.f64)

# =============================================================================
# Kind Tags and Capacities
# =============================================================================

OBJECT_SPHERE = 0
OBJECT_PLANE = 1

LIGHT_DIRECTIONAL = 0
LIGHT_AMBIENT = 1
LIGHT_POINT = 2

# Maximum number of primitives and lights supported in an uploaded scene
MAX_OBJECTS = 256
MAX_LIGHTS = 64

# Stand-in for an infinite distance (directional and ambient lights, misses)
FAR_DISTANCE = 1e300

# =============================================================================
# Scene Fields (allocated lazily, after Taichi is initialised)
# =============================================================================

_taichi_initialized = False
_fields_allocated = False

_object_count: Any = None
_object_kinds: Any = None
_object_points: Any = None  # Sphere center or plane origin
_object_normals: Any = None  # Plane normal (unused for spheres)
_object_radii: Any = None  # Sphere radius (unused for planes)
_object_colors: Any = None
_object_albedos: Any = None

_light_count: Any = None
_light_kinds: Any = None
_light_vectors: Any = None  # Directional direction or point position
_light_colors: Any = None
_light_intensities: Any = None

_sky_color: Any = None


def init_taichi(arch: Any = None) -> None:
    """Initialise Taichi for rendering, once per process.

    Calling ti.init() again would discard the scene fields, so later calls
    are ignored. Code that calls ti.init() itself must pass
    default_fp=ti.f64 and must not also call this function.

    Args:
        arch: Taichi backend architecture (default ti.cpu).
    """
    global _taichi_initialized
    if _taichi_initialized:
        return
    ti.init(arch=ti.cpu if arch is None else arch, default_fp=ti.f64)
    _taichi_initialized = True


def _allocate_fields() -> None:
    """Allocate the scene fields on first use.

    Fields are created once at maximum capacity so the render kernel is
    compiled only once.
    """
    global _fields_allocated
    global _object_count, _object_kinds, _object_points, _object_normals
    global _object_radii, _object_colors, _object_albedos
    global _light_count, _light_kinds, _light_vectors, _light_colors, _light_intensities
    global _sky_color

    if _fields_allocated:
        return

    _object_count = ti.field(dtype=ti.i32, shape=())
    _object_kinds = ti.field(dtype=ti.i32, shape=MAX_OBJECTS)
    _object_points = ti.Vector.field(3, dtype=ti.f64, shape=MAX_OBJECTS)
    _object_normals = ti.Vector.field(3, dtype=ti.f64, shape=MAX_OBJECTS)
    _object_radii = ti.field(dtype=ti.f64, shape=MAX_OBJECTS)
    _object_colors = ti.Vector.field(3, dtype=ti.f64, shape=MAX_OBJECTS)
    _object_albedos = ti.field(dtype=ti.f64, shape=MAX_OBJECTS)

    _light_count = ti.field(dtype=ti.i32, shape=())
    _light_kinds = ti.field(dtype=ti.i32, shape=MAX_LIGHTS)
    _light_vectors = ti.Vector.field(3, dtype=ti.f64, shape=MAX_LIGHTS)
    _light_colors = ti.Vector.field(3, dtype=ti.f64, shape=MAX_LIGHTS)
    _light_intensities = ti.field(dtype=ti.f64, shape=MAX_LIGHTS)

    _sky_color = ti.Vector.field(3, dtype=ti.f64, shape=())

    _fields_allocated = True
    logger.debug("Allocated Taichi scene fields (%d objects, %d lights)", MAX_OBJECTS, MAX_LIGHTS)


def upload_scene(scene: "Scene") -> None:
    """Copy a scene into the Taichi scene fields.

    Args:
        scene: The scene to upload.

    Raises:
        RuntimeError: If the scene exceeds MAX_OBJECTS or MAX_LIGHTS.
        TypeError: If the scene contains an unknown object or light type.
    """
    if len(scene.objects) > MAX_OBJECTS:
        raise RuntimeError(f"Maximum number of objects ({MAX_OBJECTS}) exceeded")
    if len(scene.lights) > MAX_LIGHTS:
        raise RuntimeError(f"Maximum number of lights ({MAX_LIGHTS}) exceeded")

    _allocate_fields()

    for i, obj in enumerate(scene.objects):
        if isinstance(obj, Sphere):
            _object_kinds[i] = OBJECT_SPHERE
            _object_points[i] = list(obj.center.to_tuple())
            _object_normals[i] = [0.0, 0.0, 0.0]
            _object_radii[i] = obj.radius
        elif isinstance(obj, Plane):
            _object_kinds[i] = OBJECT_PLANE
            _object_points[i] = list(obj.origin.to_tuple())
            _object_normals[i] = list(obj.normal.to_tuple())
            _object_radii[i] = 0.0
        else:
            raise TypeError(f"Unknown object type: {type(obj).__name__}")
        _object_colors[i] = list(obj.material.color.to_tuple())
        _object_albedos[i] = obj.material.albedo
    _object_count[None] = len(scene.objects)

    for j, light in enumerate(scene.lights):
        if isinstance(light, DirectionalLight):
            _light_kinds[j] = LIGHT_DIRECTIONAL
            _light_vectors[j] = list(light.direction.to_tuple())
        elif isinstance(light, AmbientLight):
            _light_kinds[j] = LIGHT_AMBIENT
            _light_vectors[j] = [0.0, 0.0, 0.0]
        elif isinstance(light, PointLight):
            _light_kinds[j] = LIGHT_POINT
            _light_vectors[j] = list(light.position.to_tuple())
        else:
            raise TypeError(f"Unknown light type: {type(light).__name__}")
        _light_colors[j] = list(light.color.to_tuple())
        _light_intensities[j] = light.intensity
    _light_count[None] = len(scene.lights)

    _sky_color[None] = list(scene.sky.to_tuple())
    logger.debug(
        "Uploaded scene: %d object(s), %d light(s)", len(scene.objects), len(scene.lights)
    )


def get_object_count() -> int:
    """Get the number of objects in the uploaded scene."""
    _allocate_fields()
    return int(_object_count[None])


def get_light_count() -> int:
    """Get the number of lights in the uploaded scene."""
    _allocate_fields()
    return int(_light_count[None])


# =============================================================================
# Taichi Functions
# =============================================================================


@ti.func
def _normalize(v: vec3) -> vec3:
    """Normalize a vector the same way as Vector3.normalize()."""
    inv_length = 1.0 / ti.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])
    return v * inv_length


@ti.func
def _dot(a: vec3, b: vec3) -> ti.f64:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


@ti.func
def _intersect_object(i: ti.i32, origin: vec3, direction: vec3) -> ti.f64:
    """Intersect a ray with object i.

    Returns:
        The hit distance, or -1.0 for a miss.
    """
    distance = -1.0
    kind = _object_kinds[i]
    if kind == OBJECT_SPHERE:
        l = _object_points[i] - origin
        adj = _dot(l, direction)
        d2 = _dot(l, l) - adj * adj
        radius2 = _object_radii[i] * _object_radii[i]
        if d2 <= radius2:
            thc = ti.sqrt(radius2 - d2)
            t0 = adj - thc
            t1 = adj + thc
            if t0 >= 0.0:
                distance = t0
            elif t1 >= 0.0:
                distance = t1
    elif kind == OBJECT_PLANE:
        normal = _object_normals[i]
        denom = _dot(normal, direction)
        if denom > PLANE_EPSILON:
            v = _object_points[i] - origin
            t = _dot(v, normal) / denom
            if t >= 0.0:
                distance = t
    return distance


@ti.func
def _surface_normal(i: ti.i32, hit_point: vec3) -> vec3:
    """Compute the unit shading normal of object i at a surface point."""
    normal = vec3(0.0, 0.0, 0.0)
    kind = _object_kinds[i]
    if kind == OBJECT_SPHERE:
        normal = _normalize(hit_point - _object_points[i])
    elif kind == OBJECT_PLANE:
        normal = -_object_normals[i]
    return normal


@ti.func
def _trace(origin: vec3, direction: vec3):
    """Find the closest object hit by a ray.

    Returns:
        A tuple (index, distance). index is -1 for a miss.
    """
    hit_index = -1
    closest = FAR_DISTANCE
    for i in range(_object_count[None]):
        t = _intersect_object(i, origin, direction)
        if t >= 0.0 and t < closest:
            hit_index = i
            closest = t
    return hit_index, closest


@ti.func
def _light_direction(j: ti.i32, hit_point: vec3):
    """Direction from a surface point toward light j.

    Returns:
        A tuple (has_direction, direction). has_direction is 0 for ambient
        light, which is never occluded.
    """
    has_direction = 1
    direction = vec3(0.0, 0.0, 0.0)
    kind = _light_kinds[j]
    if kind == LIGHT_DIRECTIONAL:
        direction = -_light_vectors[j]
    elif kind == LIGHT_POINT:
        direction = _normalize(_light_vectors[j] - hit_point)
    else:
        has_direction = 0
    return has_direction, direction


@ti.func
def _light_intensity(j: ti.i32, hit_point: vec3) -> ti.f64:
    intensity = _light_intensities[j]
    if _light_kinds[j] == LIGHT_POINT:
        offset = _light_vectors[j] - hit_point
        r2 = _dot(offset, offset)
        intensity = intensity / (4.0 * tm.pi * r2)
    return intensity


@ti.func
def _light_distance(j: ti.i32, hit_point: vec3) -> ti.f64:
    distance = FAR_DISTANCE
    if _light_kinds[j] == LIGHT_POINT:
        offset = _light_vectors[j] - hit_point
        distance = ti.sqrt(_dot(offset, offset))
    return distance


@ti.func
def _shade(origin: vec3, direction: vec3, shadow_bias: ti.f64) -> vec3:
    """Shade a primary ray; mirrors fever_ray.core.integrator.shade()."""
    color = _sky_color[None]
    hit_index, distance = _trace(origin, direction)
    if hit_index >= 0:
        hit_point = origin + direction * distance
        normal = _surface_normal(hit_index, hit_point)
        light_reflected = _object_albedos[hit_index] / tm.pi
        accumulated = vec3(0.0, 0.0, 0.0)
        for j in range(_light_count[None]):
            has_direction, to_light = _light_direction(j, hit_point)
            light_power = 0.0
            if has_direction == 0:
                light_power = _light_intensity(j, hit_point)
            else:
                shadow_origin = hit_point + normal * shadow_bias
                blocker, blocker_distance = _trace(shadow_origin, to_light)
                if blocker < 0 or blocker_distance >= _light_distance(j, hit_point):
                    light_power = ti.max(0.0, _dot(normal, to_light)) * _light_intensity(j, hit_point)
            accumulated += _object_colors[hit_index] * _light_colors[j] * light_power * light_reflected
        color = ti.min(ti.max(accumulated, 0.0), 1.0)
    return color


@ti.kernel
def _render_kernel(
    out: ti.types.ndarray(dtype=ti.f64, ndim=3),
    width: ti.i32,
    height: ti.i32,
    aspect_ratio: ti.f64,
    fov_adjustment: ti.f64,
    shadow_bias: ti.f64,
):
    """Shade every pixel in parallel into out[y, x, channel]."""
    for y, x in ti.ndrange(height, width):
        ndc_x = (x + 0.5) / width * 2.0 - 1.0
        ndc_y = 1.0 - (y + 0.5) / height * 2.0
        direction = _normalize(
            vec3(ndc_x * aspect_ratio * fov_adjustment, ndc_y * fov_adjustment, -1.0)
        )
        color = _shade(vec3(0.0, 0.0, 0.0), direction, shadow_bias)
        out[y, x, 0] = color[0]
        out[y, x, 1] = color[1]
        out[y, x, 2] = color[2]


def render_linear_taichi(config: "Config") -> npt.NDArray[np.float64]:
    """Render a configuration to linear colors with the Taichi kernel.

    Pixels that hit an object are clamped to [0, 1]; sky pixels carry the
    sky color unchanged.

    Returns:
        Array of shape (height, width, 3) with dtype float64.

    Raises:
        InvalidAspectRatio: If config.width <= config.height.
    """
    camera = setup_camera(config)
    upload_scene(config.scene)

    image = np.zeros((config.height, config.width, 3), dtype=np.float64)
    start_time = time.perf_counter()
    _render_kernel(
        image,
        config.width,
        config.height,
        camera.aspect_ratio,
        camera.fov_adjustment,
        config.shadow_bias,
    )
    logger.info(
        "Rendered %dx%d with Taichi in %.2fs",
        config.width,
        config.height,
        time.perf_counter() - start_time,
    )
    return image


def render_taichi(config: "Config") -> npt.NDArray[np.uint8]:
    """Render a configuration into an 8-bit RGB buffer with the Taichi kernel.

    Returns:
        Array of shape (height, width, 3) with dtype uint8, laid out like
        fever_ray.core.dispatcher.render().

    Raises:
        InvalidAspectRatio: If config.width <= config.height.
    """
    return linear_to_uint8(render_linear_taichi(config))
