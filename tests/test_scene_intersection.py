"""Unit tests for scene-level intersection (closest hit)."""

import pytest


def _sphere(z, radius=1.0):
    from fever_ray.core.color import Color
    from fever_ray.core.vector import Point3
    from fever_ray.geometry.sphere import Sphere
    from fever_ray.materials.lambertian import Material

    return Sphere(Point3(0.0, 0.0, z), radius, Material(Color.white(), 0.5))


def _forward_ray():
    from fever_ray.core.ray import Ray
    from fever_ray.core.vector import Point3, Vector3

    return Ray(Point3.zero(), Vector3(0.0, 0.0, -1.0))


class TestTrace:
    """Tests for trace()."""

    def test_empty_scene_misses(self):
        """Test that tracing an empty scene returns None."""
        from fever_ray.scene.intersection import trace
        from fever_ray.scene.manager import Scene

        assert trace(Scene(), _forward_ray()) is None

    def test_nearest_of_two_spheres(self):
        """Test the closer sphere wins regardless of scene order."""
        from fever_ray.scene.intersection import trace
        from fever_ray.scene.manager import Scene

        far = _sphere(-10.0)
        near = _sphere(-5.0)
        hit = trace(Scene(objects=[far, near]), _forward_ray())
        assert hit is not None
        assert hit.object is near
        assert hit.distance == pytest.approx(4.0)

    def test_tie_goes_to_first_object(self):
        """Test equal distances keep the earlier object."""
        from fever_ray.scene.intersection import trace
        from fever_ray.scene.manager import Scene

        first = _sphere(-5.0)
        second = _sphere(-5.0)
        hit = trace(Scene(objects=[first, second]), _forward_ray())
        assert hit.object is first

    def test_plane_and_sphere(self):
        """Test that a plane closer than a sphere is the closest hit."""
        from fever_ray.core.color import Color
        from fever_ray.core.vector import Point3, Vector3
        from fever_ray.geometry.plane import Plane
        from fever_ray.materials.lambertian import Material
        from fever_ray.scene.intersection import trace
        from fever_ray.scene.manager import Scene

        wall = Plane(Point3(0.0, 0.0, -3.0), Vector3(0.0, 0.0, -1.0), Material(Color.white(), 0.5))
        hit = trace(Scene(objects=[_sphere(-5.0), wall]), _forward_ray())
        assert hit.object is wall
        assert hit.distance == pytest.approx(3.0)


class TestObjectDispatch:
    """Tests for the per-kind object helpers."""

    def test_unknown_object_raises(self):
        """Test that unknown object kinds are rejected."""
        from fever_ray.scene.objects import intersection

        with pytest.raises(TypeError):
            intersection(object(), _forward_ray())

    def test_material_of(self):
        """Test material_of returns the object's material."""
        from fever_ray.scene.objects import material_of

        sphere = _sphere(-5.0)
        assert material_of(sphere) is sphere.material
