"""A CPU ray tracer with Lambertian shading and shadow rays.

This package renders scenes made of spheres and planes lit by directional,
ambient and point lights. Every pixel casts one primary ray, finds the
nearest intersection and accumulates the contribution of each light,
testing occlusion with a shadow ray.

Subpackages:
    core: Vector/point math, colors, rays, shading and pixel dispatch
    camera: Pinhole camera model for primary ray generation
    geometry: Sphere and plane primitives with intersection tests
    materials: Lambertian diffuse material
    scene: Lights, scene tracing and scene description loading
    preview: PNG export and Matplotlib preview

Example:
    >>> from fever_ray.core.dispatcher import render
    >>> from fever_ray.scene.presets import create_demo_config
    >>> image = render(create_demo_config(320, 240))
    >>> image.shape
    (240, 320, 3)
"""

__version__ = "0.1.0"
