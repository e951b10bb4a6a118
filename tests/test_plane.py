"""Unit tests for ray-plane intersection.

The floor used here sits at y = -2 with stored normal (0, -1, 0), so it is
visible from above.
"""

import pytest


@pytest.fixture
def floor():
    """A floor plane at y = -2 seen from above."""
    from fever_ray.core.color import Color
    from fever_ray.core.vector import Point3, Vector3
    from fever_ray.geometry.plane import Plane
    from fever_ray.materials.lambertian import Material

    return Plane(Point3(0.0, -2.0, 0.0), Vector3(0.0, -1.0, 0.0), Material(Color.white(), 0.5))


def _ray(origin, direction):
    from fever_ray.core.ray import Ray
    from fever_ray.core.vector import Point3, Vector3

    return Ray(Point3(*origin), Vector3(*direction).normalize())


class TestPlaneIntersection:
    """Tests for hit_plane."""

    def test_straight_down_hits(self, floor):
        """Test a ray straight down hits the floor at its height."""
        from fever_ray.geometry.plane import hit_plane

        assert hit_plane(floor, _ray((0, 0, 0), (0, -1, 0))) == pytest.approx(2.0)

    def test_oblique_hit(self, floor):
        """Test a 45 degree ray travels sqrt(2) times as far."""
        from fever_ray.geometry.plane import hit_plane

        distance = hit_plane(floor, _ray((0, 0, 0), (0, -1, -1)))
        assert distance == pytest.approx(2.0 * 2.0**0.5)

    def test_parallel_ray_misses(self, floor):
        """Test a ray parallel to the plane misses."""
        from fever_ray.geometry.plane import hit_plane

        assert hit_plane(floor, _ray((0, 0, 0), (1, 0, 0))) is None

    def test_back_face_misses(self, floor):
        """Test a ray travelling against the stored normal misses."""
        from fever_ray.geometry.plane import hit_plane

        # From below, looking up at the back of the floor
        assert hit_plane(floor, _ray((0, -5, 0), (0, 1, 0))) is None

    def test_plane_behind_origin_misses(self, floor):
        """Test a plane behind the ray origin is not hit."""
        from fever_ray.geometry.plane import hit_plane

        assert hit_plane(floor, _ray((0, -3, 0), (0, -1, 0))) is None

    def test_nearly_parallel_ray_misses(self, floor):
        """Test rays within PLANE_EPSILON of parallel are treated as misses."""
        from fever_ray.core.ray import Ray
        from fever_ray.core.vector import Point3, Vector3
        from fever_ray.geometry.plane import hit_plane

        ray = Ray(Point3.zero(), Vector3(1.0, -1e-9, 0.0))
        assert hit_plane(floor, ray) is None


class TestPlaneNormal:
    """Tests for plane_normal."""

    def test_shading_normal_opposes_stored_normal(self, floor):
        """Test the floor's shading normal points up toward the viewer."""
        from fever_ray.core.vector import Point3, Vector3
        from fever_ray.geometry.plane import plane_normal

        assert plane_normal(floor, Point3(3.0, -2.0, -7.0)) == Vector3(0.0, 1.0, 0.0)
