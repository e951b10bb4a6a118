"""Pytest configuration for raytracer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest


@pytest.fixture(scope="session")
def taichi_runtime():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls, which would
    discard the scene fields allocated by the Taichi backend. Tests that
    use this fixture are skipped when Taichi is not installed.
    """
    ti = pytest.importorskip("taichi")
    from fever_ray.core.taichi_backend import init_taichi

    init_taichi(arch=ti.cpu)
    yield ti


@pytest.fixture
def white_material():
    """A white Lambertian material with albedo 0.5."""
    from fever_ray.core.color import Color
    from fever_ray.materials.lambertian import Material

    return Material(color=Color.white(), albedo=0.5)


@pytest.fixture
def sphere_config():
    """The single-sphere reference configuration at 800x600."""
    from fever_ray.scene.presets import create_single_sphere_config

    return create_single_sphere_config()


@pytest.fixture
def small_demo_config():
    """The demo configuration at a low resolution for fast full renders."""
    from fever_ray.scene.presets import create_demo_config

    return create_demo_config(width=48, height=32)
