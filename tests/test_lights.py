"""Unit tests for light sources."""

import math

import pytest


class TestLightQueries:
    """Tests for light_direction, light_intensity and light_distance."""

    def test_directional_light(self):
        """Test a directional light points back against its direction."""
        from fever_ray.core.color import Color
        from fever_ray.core.vector import Point3, Vector3
        from fever_ray.scene.lights import (
            DirectionalLight,
            light_direction,
            light_distance,
            light_intensity,
        )

        light = DirectionalLight(Vector3(0.0, -1.0, 0.0), Color.white(), 2.0)
        point = Point3(5.0, 0.0, -3.0)
        assert light_direction(light, point) == Vector3(0.0, 1.0, 0.0)
        assert light_intensity(light, point) == 2.0
        assert light_distance(light, point) == math.inf

    def test_ambient_light_has_no_direction(self):
        """Test ambient light skips the occlusion test."""
        from fever_ray.core.color import Color
        from fever_ray.core.vector import Point3
        from fever_ray.scene.lights import (
            AmbientLight,
            light_direction,
            light_distance,
            light_intensity,
        )

        light = AmbientLight(Color.white(), 0.3)
        assert light_direction(light, Point3.zero()) is None
        assert light_intensity(light, Point3.zero()) == 0.3
        assert light_distance(light, Point3.zero()) == math.inf

    def test_point_light_direction_and_distance(self):
        """Test a point light's direction is unit and its distance Euclidean."""
        from fever_ray.core.color import Color
        from fever_ray.core.vector import Point3
        from fever_ray.scene.lights import PointLight, light_direction, light_distance

        light = PointLight(Point3(0.0, 3.0, 4.0), Color.white(), 100.0)
        direction = light_direction(light, Point3.zero())
        assert direction.to_tuple() == pytest.approx((0.0, 0.6, 0.8))
        assert light_distance(light, Point3.zero()) == pytest.approx(5.0)

    def test_point_light_inverse_square_falloff(self):
        """Test doubling the distance quarters the intensity."""
        from fever_ray.core.color import Color
        from fever_ray.core.vector import Point3
        from fever_ray.scene.lights import PointLight, light_intensity

        light = PointLight(Point3.zero(), Color.white(), 100.0)
        near = light_intensity(light, Point3(0.0, 0.0, -1.0))
        far = light_intensity(light, Point3(0.0, 0.0, -2.0))
        assert near == pytest.approx(100.0 / (4.0 * math.pi))
        assert far == pytest.approx(near / 4.0)

    def test_light_color(self):
        """Test light_color returns the light's color for every kind."""
        from fever_ray.core.color import Color
        from fever_ray.core.vector import Point3, Vector3
        from fever_ray.scene.lights import AmbientLight, DirectionalLight, PointLight, light_color

        red = Color(1.0, 0.0, 0.0)
        for light in (
            DirectionalLight(Vector3(0.0, 0.0, -1.0), red, 1.0),
            AmbientLight(red, 1.0),
            PointLight(Point3.zero(), red, 1.0),
        ):
            assert light_color(light) == red

    def test_negative_intensity_raises(self):
        """Test that lights reject negative intensity."""
        from fever_ray.core.color import Color
        from fever_ray.scene.lights import AmbientLight

        with pytest.raises(ValueError):
            AmbientLight(Color.white(), -1.0)

    def test_unknown_light_type_raises(self):
        """Test that unknown light kinds are rejected."""
        from fever_ray.core.vector import Point3
        from fever_ray.scene.lights import light_direction

        with pytest.raises(TypeError):
            light_direction(object(), Point3.zero())
