"""Ready-made render configurations.

create_single_sphere_config():
    One white sphere straight ahead of the camera, lit head-on by a
    directional light against a black sky. The pixel at the image center
    is lit and the corners show the sky.

create_demo_config():
    Three colored spheres resting on a floor plane, lit by a directional
    light, a point light and a weak ambient light under a blue sky.

Both scenes use the fixed pinhole camera at the origin looking down -z.
"""

from fever_ray.core.color import Color
from fever_ray.core.vector import Point3, Vector3
from fever_ray.geometry.plane import Plane
from fever_ray.geometry.sphere import Sphere
from fever_ray.materials.lambertian import Material
from fever_ray.scene.lights import AmbientLight, DirectionalLight, PointLight
from fever_ray.scene.manager import Config, Scene

# Floor height for the demo scene
FLOOR_Y = -2.0


def create_single_sphere_config(
    width: int = 800,
    height: int = 600,
    fov: float = 90.0,
) -> Config:
    """Create the single-sphere reference scene.

    A white sphere of radius 1 at (0, 0, -5) with albedo 0.5, lit by a
    white directional light travelling along -z with intensity 1.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        fov: Field of view in degrees.

    Returns:
        The render configuration.
    """
    scene = Scene(
        sky=Color.black(),
        lights=(
            DirectionalLight(
                direction=Vector3(0.0, 0.0, -1.0),
                color=Color.white(),
                intensity=1.0,
            ),
        ),
        objects=(
            Sphere(
                center=Point3(0.0, 0.0, -5.0),
                radius=1.0,
                material=Material(color=Color.white(), albedo=0.5),
            ),
        ),
    )
    return Config(width=width, height=height, fov=fov, scene=scene)


def create_demo_config(width: int = 640, height: int = 480, fov: float = 90.0) -> Config:
    """Create the demo scene: three spheres on a floor with three lights.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        fov: Field of view in degrees.

    Returns:
        The render configuration.
    """
    objects = (
        Sphere(
            center=Point3(0.0, 0.0, -5.0),
            radius=1.0,
            material=Material(color=Color.from_rgb_hex(0x66FF66), albedo=0.6),
        ),
        Sphere(
            center=Point3(-3.0, 1.0, -6.0),
            radius=2.0,
            material=Material(color=Color.from_rgb_hex(0xDB7093), albedo=0.5),
        ),
        Sphere(
            center=Point3(2.0, -1.0, -4.0),
            radius=1.0,
            material=Material(color=Color(1.0, 0.8, 0.2), albedo=0.4),
        ),
        Plane(
            origin=Point3(0.0, FLOOR_Y, 0.0),
            normal=Vector3(0.0, -1.0, 0.0),
            material=Material(color=Color(0.4, 0.4, 0.4), albedo=0.4),
        ),
    )
    lights = (
        DirectionalLight(
            direction=Vector3(-0.25, -1.0, -0.5).normalize(),
            color=Color.white(),
            intensity=8.0,
        ),
        PointLight(
            position=Point3(1.0, 2.5, -3.0),
            color=Color(1.0, 0.9, 0.7),
            intensity=600.0,
        ),
        AmbientLight(color=Color.white(), intensity=0.3),
    )
    scene = Scene(sky=Color(0.1, 0.2, 0.5), lights=lights, objects=objects)
    return Config(width=width, height=height, fov=fov, scene=scene)
