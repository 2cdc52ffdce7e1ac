import math

import pytest

from flat_triangle_renderer.math_utils import Vec3


def test_arithmetic_returns_new_instances() -> None:
    a = Vec3(1, 2, 3)
    b = Vec3(4, 5, 6)
    assert a + b == Vec3(5, 7, 9)
    assert b - a == Vec3(3, 3, 3)
    assert a * 2 == Vec3(2, 4, 6)
    assert 2 * a == Vec3(2, 4, 6)
    assert a.add(b) == a + b
    assert a.subtract(b) == a - b
    assert a.scale(0.5) == Vec3(0.5, 1.0, 1.5)
    assert a == Vec3(1, 2, 3)


def test_dot_cross_length() -> None:
    x = Vec3(1, 0, 0)
    y = Vec3(0, 1, 0)
    assert x.dot(y) == 0.0
    assert x.cross(y) == Vec3(0, 0, 1)
    assert y.cross(x) == Vec3(0, 0, -1)
    assert Vec3(3, 4, 0).length() == 5.0
    assert Vec3(3, 4, 0).magnitude() == 5.0


def test_normalize_unit_and_zero() -> None:
    n = Vec3(0, 3, 4).normalize()
    assert n.length() == pytest.approx(1.0)
    assert n == Vec3(0, 0.6, 0.8)
    assert Vec3(0, 0, 0).normalize() == Vec3(0, 0, 0)
    assert Vec3(0, 0, 0).normalize().is_zero()


def test_equality_is_exact() -> None:
    assert Vec3(0.1 + 0.2, 0, 0) != Vec3(0.3, 0, 0)
    assert Vec3(1, 2, 3) != (1, 2, 3)


def test_division_by_zero_raises() -> None:
    with pytest.raises(ZeroDivisionError):
        Vec3(1, 1, 1) / 0


def test_sequence_protocol_and_coercion() -> None:
    v = Vec3.of((1, 2, 3))
    assert list(v) == [1.0, 2.0, 3.0]
    assert v[2] == 3.0
    assert Vec3.of(v) is v
    with pytest.raises(IndexError):
        v[3]


def test_lerp() -> None:
    a = Vec3(0, 0, 0)
    b = Vec3(2, 4, -2)
    assert a.lerp(b, 0.5) == Vec3(1, 2, -1)
    assert a.lerp(b, 0.0) == a
    assert math.isclose(a.lerp(b, 1.0).z, -2.0)
