import pytest

from yapcsg.geom import Vector
from yapcsg.xform import IDENTITY, Matrix, Rotation, Transform

## unit tests for yapCSG xform.py


class TestXform:
    """unit tests for yapCSG matrix operations"""

    def test_matrix(self):
        foo = Matrix([1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15, 16])
        bar = Matrix([[1, 0, 0, 1], [0, 1, 0, 1], [0, 0, 1, 1], [0, 0, 0, 1]])
        I = Matrix()
        assert I == IDENTITY
        assert I.mul(bar) == bar
        assert I.mul(foo) == foo
        assert foo.mul(bar).m == [[1, 2, 3, 10], [5, 6, 7, 26],
                                  [9, 10, 11, 42], [13, 14, 15, 58]]
        assert foo.transpose().getrow(0) == [1, 5, 9, 13]
        assert foo.getcol(3) == [4, 8, 12, 16]
        assert Matrix(foo) == foo

    def test_point_and_direction(self):
        shift = Matrix([[1, 0, 0, 1], [0, 1, 0, 2], [0, 0, 1, 3], [0, 0, 0, 1]])
        p = Vector(1, 1, 1)
        assert shift.mul(p) == Vector(2, 3, 4)
        assert shift.rotate(p) == p

    def test_bad_arguments(self):
        with pytest.raises(ValueError):
            Matrix([1, 2, 3])
        with pytest.raises(ValueError):
            Matrix('matrix')
        with pytest.raises(ValueError):
            IDENTITY.get(4, 0)
        with pytest.raises(ValueError):
            Matrix().set(0, 0, 'x')
        with pytest.raises(ValueError):
            IDENTITY.mul('x')

    def test_rotation(self):
        r = Rotation(Vector(0, 0, 1), 90)
        assert r.rotate(Vector(1, 0, 0)).is_equal(Vector(0, 1, 0))
        assert r.mul(Vector(0, 1, 0)).is_equal(Vector(-1, 0, 0))
        inv = Rotation(Vector(0, 0, 2), 90, inverse=True)
        assert inv.rotate(Vector(0, 1, 0)).is_equal(Vector(1, 0, 0))
        both = r.mul(inv)
        for i in range(4):
            for j in range(4):
                assert both.get(i, j) == pytest.approx(IDENTITY.get(i, j), abs=1e-12)

    def test_rotation_needs_axis(self):
        with pytest.raises(ValueError):
            Rotation(Vector(0, 0, 0), 45)

    def test_transform(self):
        t = Transform(offset=Vector(1, 0, 0),
                      rotation=Rotation(Vector(0, 0, 1), 90),
                      scale=Vector(2, 1, 1))
        assert t.apply(Vector(1, 0, 0)).is_equal(Vector(1, 2, 0))
        assert not t.is_flipped
        assert Transform(scale=Vector(-1, 1, 1)).is_flipped
        assert not Transform(scale=Vector(-1, -1, 1)).is_flipped
        assert Transform().apply(Vector(1, 2, 3)) == Vector(1, 2, 3)
