"""
Test Plane, Ray3D and CoordinateSystem.
"""

import math
import pytest
import numpy as np
from pathlib import Path

# Add src to path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from spatial.geometry import (
    CoordinateSystem,
    Plane,
    Point3D,
    Ray3D,
    UnitVector3D,
    Vector3D,
    rotation_matrix,
)
from spatial.units import AngleUnit
from spatial.config import ToleranceConfig
from spatial.errors import InvalidArgumentError, InvalidDirectionError

X = UnitVector3D.X_AXIS
Y = UnitVector3D.Y_AXIS
Z = UnitVector3D.Z_AXIS


class TestPlane:
    """Plane construction and queries."""

    def test_from_points(self):
        plane = Plane.from_points(Point3D(0.0, 0.0, 0.0),
                                  Point3D(1.0, 0.0, 0.0),
                                  Point3D(0.0, 1.0, 0.0))
        assert plane.normal == Z
        assert plane.root_point == Point3D.ORIGIN

    def test_collinear_points(self):
        with pytest.raises(InvalidArgumentError):
            Plane.from_points(Point3D(0.0, 0.0, 0.0),
                              Point3D(1.0, 1.0, 1.0),
                              Point3D(2.0, 2.0, 2.0))

    def test_from_points_small_scale(self):
        plane = Plane.from_points(Point3D(0.0, 0.0, 0.0),
                                  Point3D(1e-5, 0.0, 0.0),
                                  Point3D(0.0, 1e-5, 0.0))
        assert plane.normal == Z

    def test_collinear_points_small_scale(self):
        with pytest.raises(InvalidArgumentError):
            Plane.from_points(Point3D(0.0, 0.0, 0.0),
                              Point3D(1e-5, 0.0, 0.0),
                              Point3D(2e-5, 1e-20, 0.0))

    def test_collinear_points_large_scale(self):
        with pytest.raises(InvalidArgumentError):
            Plane.from_points(Point3D(0.0, 0.0, 0.0),
                              Point3D(1e6, 0.0, 0.0),
                              Point3D(2e6, 1e-6, 0.0))

    def test_from_points_custom_tolerance(self):
        loose = ToleranceConfig(orthonormal=0.1)
        points = (Point3D(0.0, 0.0, 0.0), Point3D(1.0, 0.0, 0.0), Point3D(2.0, 0.05, 0.0))
        assert Plane.from_points(*points).normal == Z
        with pytest.raises(InvalidArgumentError):
            Plane.from_points(*points, tolerances=loose)

    def test_normal_is_normalized(self):
        plane = Plane(Point3D.ORIGIN, Vector3D(0.0, 0.0, 4.0))
        assert isinstance(plane.normal, UnitVector3D)
        assert plane.normal == Z

    def test_zero_normal(self):
        with pytest.raises(InvalidDirectionError):
            Plane(Point3D.ORIGIN, Vector3D.ZERO)

    def test_signed_distance_and_d(self):
        plane = Plane(Point3D(0.0, 0.0, 2.0), Z)
        assert plane.d == -2.0
        assert plane.signed_distance_to(Point3D(1.0, 2.0, 5.0)) == 3.0
        assert plane.signed_distance_to(Point3D(1.0, 2.0, -1.0)) == -3.0

    def test_project_point(self):
        plane = Plane(Point3D.ORIGIN, Z)
        assert plane.project(Point3D(1.0, 2.0, 3.0)) == Point3D(1.0, 2.0, 0.0)

    def test_project_vector(self):
        ray = Plane(Point3D(0.0, 0.0, 7.0), Z).project(Vector3D(1.0, 1.0, 5.0))
        assert isinstance(ray, Ray3D)
        assert ray.through_point == Point3D(0.0, 0.0, 7.0)
        assert ray.direction.equals(UnitVector3D(1.0, 1.0, 0.0), 1e-12)

    def test_project_vector_along_normal(self):
        with pytest.raises(InvalidDirectionError):
            Plane(Point3D.ORIGIN, Z).project_vector(Vector3D(0.0, 0.0, 3.0))

    def test_project_unsupported(self):
        with pytest.raises(TypeError):
            Plane(Point3D.ORIGIN, Z).project("nope")

    def test_mirror(self):
        plane = Plane(Point3D(1.0, 0.0, 0.0), X)
        assert plane.mirror_about(Point3D(3.0, 1.0, 1.0)) == Point3D(-1.0, 1.0, 1.0)

    def test_intersection(self):
        plane = Plane(Point3D.ORIGIN, Z)
        ray = Ray3D(Point3D(1.0, 2.0, 5.0), Vector3D(0.0, 0.0, -1.0))
        assert plane.intersection_with(ray) == Point3D(1.0, 2.0, 0.0)
        assert ray.intersection_with(plane) == Point3D(1.0, 2.0, 0.0)

    def test_oblique_intersection(self):
        plane = Plane(Point3D(0.0, 0.0, 1.0), Z)
        ray = Ray3D(Point3D.ORIGIN, Vector3D(1.0, 0.0, 1.0))
        assert plane.intersection_with(ray).equals(Point3D(1.0, 0.0, 1.0), 1e-12)

    def test_parallel_ray(self):
        plane = Plane(Point3D.ORIGIN, Z)
        with pytest.raises(InvalidArgumentError):
            plane.intersection_with(Ray3D(Point3D(0.0, 0.0, 1.0), X))

    def test_equals(self):
        a = Plane(Point3D.ORIGIN, Z)
        b = Plane(Point3D(0.0, 0.0, 1e-12), Z)
        assert a.equals(b, 1e-9)
        assert not a.equals(b, 1e-15)


class TestRay3D:
    """Ray3D queries."""

    def test_point_at(self):
        ray = Ray3D(Point3D(1.0, 1.0, 1.0), X)
        assert ray.point_at(2.0) == Point3D(3.0, 1.0, 1.0)

    def test_distance_to(self):
        ray = Ray3D(Point3D.ORIGIN, Vector3D(2.0, 0.0, 0.0))
        assert ray.closest_point_to(Point3D(3.0, 4.0, 0.0)) == Point3D(3.0, 0.0, 0.0)
        assert ray.distance_to(Point3D(3.0, 4.0, 0.0)) == 4.0

    def test_str(self):
        assert str(Ray3D(Point3D.ORIGIN, X)) == "Ray3D(through=(0.0, 0.0, 0.0), direction=(1.0, 0.0, 0.0))"


class TestCoordinateSystem:
    """Rigid transforms."""

    def test_identity(self):
        cs = CoordinateSystem.identity()
        np.testing.assert_array_equal(cs.to_matrix_4x4(), np.eye(4))
        assert cs.transform(Point3D(1.0, 2.0, 3.0)) == Point3D(1.0, 2.0, 3.0)

    def test_rotation_matrix_is_orthonormal(self):
        R = rotation_matrix(Vector3D(1.0, 2.0, 3.0), 0.7)
        np.testing.assert_array_almost_equal(R.T @ R, np.eye(3))
        assert np.linalg.det(R) == pytest.approx(1.0)

    def test_rotation_about_axis(self):
        cs = CoordinateSystem.rotation(90.0, Z, AngleUnit.DEGREES)
        assert cs.transform(X).equals(Y, 1e-12)
        assert cs.transform(Point3D(1.0, 0.0, 5.0)).equals(Point3D(0.0, 1.0, 5.0), 1e-12)

    def test_from_euler(self):
        cs = CoordinateSystem.from_euler(0.0, 0.0, 90.0, AngleUnit.DEGREES)
        assert cs.transform(X).equals(Y, 1e-12)
        cs = CoordinateSystem.from_euler(math.pi / 2, 0.0, 0.0)
        assert cs.transform(Y).equals(Z, 1e-12)

    def test_translation(self):
        cs = CoordinateSystem.translation(Vector3D(1.0, 2.0, 3.0))
        assert cs.transform(Point3D.ORIGIN) == Point3D(1.0, 2.0, 3.0)
        # vectors ignore the origin
        assert cs.transform(X) == Vector3D(1.0, 0.0, 0.0)

    def test_transform_unsupported(self):
        with pytest.raises(TypeError):
            CoordinateSystem.identity().transform((1.0, 2.0, 3.0))

    def test_invert_and_compose(self):
        cs = CoordinateSystem.from_euler(0.1, 0.2, 0.3, origin=Point3D(1.0, 2.0, 3.0))
        assert (cs @ cs.invert()).equals(CoordinateSystem.identity(), 1e-9)
        assert (cs.invert() @ cs).equals(CoordinateSystem.identity(), 1e-9)

        p = Point3D(-4.0, 0.5, 2.0)
        assert cs.invert().transform(cs.transform(p)).equals(p, 1e-9)

    def test_compose_order(self):
        rot = CoordinateSystem.rotation(math.pi / 2, Z)
        move = CoordinateSystem.translation(Vector3D(1.0, 0.0, 0.0))
        # move first, then rotate
        p = (rot @ move).transform(Point3D.ORIGIN)
        assert p.equals(Point3D(0.0, 1.0, 0.0), 1e-12)

    def test_non_orthogonal_basis(self):
        with pytest.raises(InvalidArgumentError):
            CoordinateSystem(Point3D.ORIGIN, X, Vector3D(1.0, 1.0, 0.0), Z)

    def test_custom_orthonormal_tolerance(self):
        skewed_y = UnitVector3D(1e-6, 1.0, 0.0)
        with pytest.raises(InvalidArgumentError):
            CoordinateSystem(Point3D.ORIGIN, X, skewed_y, Z)
        cs = CoordinateSystem(Point3D.ORIGIN, X, skewed_y, Z,
                              tolerances=ToleranceConfig(orthonormal=1e-5))
        assert cs.y_axis == skewed_y

    def test_axes_are_normalized(self):
        cs = CoordinateSystem(Point3D.ORIGIN, Vector3D(2.0, 0.0, 0.0), Y, Z)
        assert cs.x_axis == X
        assert cs.is_orthonormal()

    def test_matrix_round_trip(self):
        cs = CoordinateSystem.from_euler(0.3, -0.4, 1.1, origin=Point3D(5.0, -1.0, 2.0))
        back = CoordinateSystem.from_matrix(cs.to_matrix_4x4())
        assert back.equals(cs, 1e-12)

    def test_from_matrix_bad_shape(self):
        with pytest.raises(InvalidArgumentError):
            CoordinateSystem.from_matrix(np.eye(2))


class TestCompositeXml:
    """XML round trips for composite values."""

    @pytest.mark.parametrize("style", ["attribute", "element"])
    def test_plane(self, style):
        plane = Plane(Point3D(1.0, 2.0, 3.0), Vector3D(1.0, 1.0, 1.0))
        assert Plane.from_xml(plane.to_xml(style)) == plane

    @pytest.mark.parametrize("style", ["attribute", "element"])
    def test_ray(self, style):
        ray = Ray3D(Point3D(-1.0, 0.5, 0.0), Vector3D(0.0, 3.0, 4.0))
        assert Ray3D.from_xml(ray.to_xml(style)) == ray

    @pytest.mark.parametrize("style", ["attribute", "element"])
    def test_coordinate_system(self, style):
        cs = CoordinateSystem.from_euler(0.3, -0.4, 1.1, origin=Point3D(5.0, -1.0, 2.0))
        back = CoordinateSystem.from_xml(cs.to_xml(style))
        assert back.equals(cs, 1e-12)

    def test_plane_attribute_output(self):
        xml = Plane(Point3D.ORIGIN, Z).to_xml()
        assert xml == ('<Plane><RootPoint X="0.0" Y="0.0" Z="0.0" />'
                       '<Normal X="0.0" Y="0.0" Z="1.0" /></Plane>')

    def test_missing_part(self):
        with pytest.raises(InvalidArgumentError):
            Plane.from_xml('<Plane><RootPoint X="0" Y="0" Z="0" /></Plane>')
