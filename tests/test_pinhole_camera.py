"""Unit tests for pinhole camera ray generation.

Tests cover:
- Aspect ratio precondition (width must exceed height)
- Ray origin and unit-length directions
- Pixel-to-direction mapping (center, corners, axis orientation)
"""

import math

import pytest


class TestPinholeCamera:
    """Tests for PinholeCamera construction and ray generation."""

    def test_square_image_raises(self):
        """Test that width == height is rejected."""
        from fever_ray.camera.pinhole import PinholeCamera
        from fever_ray.errors import InvalidAspectRatio

        with pytest.raises(InvalidAspectRatio):
            PinholeCamera(width=100, height=100, fov=90.0)

    def test_portrait_image_raises(self):
        """Test that width < height is rejected."""
        from fever_ray.camera.pinhole import PinholeCamera
        from fever_ray.errors import InvalidAspectRatio

        with pytest.raises(InvalidAspectRatio) as excinfo:
            PinholeCamera(width=600, height=800, fov=90.0)
        assert excinfo.value.width == 600
        assert excinfo.value.height == 800

    def test_aspect_error_is_a_value_error(self):
        """Test that callers can catch the aspect error as ValueError."""
        from fever_ray.camera.pinhole import PinholeCamera

        with pytest.raises(ValueError):
            PinholeCamera(width=10, height=20, fov=90.0)

    def test_fov_adjustment(self):
        """Test fov_adjustment is tan(fov / 2)."""
        from fever_ray.camera.pinhole import PinholeCamera

        camera = PinholeCamera(width=800, height=600, fov=90.0)
        assert camera.fov_adjustment == pytest.approx(1.0)
        camera = PinholeCamera(width=800, height=600, fov=60.0)
        assert camera.fov_adjustment == pytest.approx(math.tan(math.radians(30.0)))

    def test_ray_starts_at_origin(self):
        """Test every primary ray starts at the world origin."""
        from fever_ray.camera.pinhole import PinholeCamera
        from fever_ray.core.vector import Point3

        camera = PinholeCamera(width=64, height=48, fov=90.0)
        assert camera.get_ray(0, 0).origin == Point3.zero()
        assert camera.get_ray(63, 47).origin == Point3.zero()

    @pytest.mark.parametrize("x,y", [(0, 0), (400, 300), (799, 0), (0, 599), (799, 599), (123, 456)])
    def test_ray_direction_is_unit(self, x, y):
        """Test primary ray directions have unit length."""
        from fever_ray.camera.pinhole import PinholeCamera

        camera = PinholeCamera(width=800, height=600, fov=90.0)
        assert camera.get_ray(x, y).direction.length() == pytest.approx(1.0, abs=1e-12)

    def test_center_ray_points_down_negative_z(self):
        """Test the ray through the image center is almost exactly -z."""
        from fever_ray.camera.pinhole import PinholeCamera

        camera = PinholeCamera(width=800, height=600, fov=90.0)
        direction = camera.get_ray(400, 300).direction
        assert direction.z == pytest.approx(-1.0, abs=1e-5)
        assert abs(direction.x) < 0.01
        assert abs(direction.y) < 0.01

    def test_axis_orientation(self):
        """Test +x is to the right and +y is up in image space."""
        from fever_ray.camera.pinhole import PinholeCamera

        camera = PinholeCamera(width=800, height=600, fov=90.0)
        top_left = camera.get_ray(0, 0).direction
        bottom_right = camera.get_ray(799, 599).direction
        assert top_left.x < 0.0 and top_left.y > 0.0
        assert bottom_right.x > 0.0 and bottom_right.y < 0.0

    def test_sensor_coordinates_of_pixel_center(self):
        """Test sensor coordinates use the pixel center and aspect correction."""
        from fever_ray.camera.pinhole import PinholeCamera

        camera = PinholeCamera(width=4, height=2, fov=90.0)
        sensor_x, sensor_y = camera.sensor_coordinates(0, 0)
        # ndc_x = 0.5 / 4 * 2 - 1 = -0.75, times aspect 2
        assert sensor_x == pytest.approx(-1.5)
        # ndc_y = 1 - 0.5 / 2 * 2 = 0.5
        assert sensor_y == pytest.approx(0.5)


class TestConfigHelpers:
    """Tests for the config-level camera helpers."""

    def test_setup_camera_checks_aspect(self):
        """Test setup_camera fails fast on a non-landscape config."""
        from fever_ray.camera.pinhole import setup_camera
        from fever_ray.errors import InvalidAspectRatio
        from fever_ray.scene.manager import Config, Scene

        config = Config(width=480, height=640, scene=Scene())
        with pytest.raises(InvalidAspectRatio):
            setup_camera(config)

    def test_create_prime_ray_matches_camera(self, sphere_config):
        """Test create_prime_ray agrees with the camera built from config."""
        from fever_ray.camera.pinhole import create_prime_ray, setup_camera

        camera = setup_camera(sphere_config)
        assert create_prime_ray(10, 20, sphere_config) == camera.get_ray(10, 20)
