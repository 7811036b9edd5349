import pytest

from bdmodel.rtree_rect import Rect, unit_sphere_volume


def test_unit_sphere_volume_matches_table():
    assert unit_sphere_volume(2) == pytest.approx(3.141593)
    assert unit_sphere_volume(3) == pytest.approx(4.188790)
    assert unit_sphere_volume(20) == pytest.approx(0.025807)


@pytest.mark.parametrize("dims", [-1, 21])
def test_unit_sphere_volume_out_of_range(dims):
    with pytest.raises(ValueError):
        unit_sphere_volume(dims)


def test_mismatched_corners_rejected():
    with pytest.raises(ValueError):
        Rect((0, 0), (1, 1, 1))


def test_inverted_corners_rejected():
    with pytest.raises(ValueError):
        Rect((2, 0), (1, 1))


def test_corners_stored_as_tuples():
    rect = Rect([1, 2], [3, 4])
    assert rect.low == (1, 2)
    assert rect.high == (3, 4)
    assert rect.dims == 2


def test_overlap_is_symmetric_and_includes_touching():
    a = Rect((0, 0), (5, 5))
    b = Rect((5, 5), (8, 8))
    c = Rect((6, 6), (8, 8))
    assert a.overlaps(b) and b.overlaps(a)
    assert not a.overlaps(c) and not c.overlaps(a)
    assert b.overlaps(c)


def test_overlap_dimension_mismatch():
    with pytest.raises(ValueError):
        Rect((0, 0), (1, 1)).overlaps(Rect((0,), (1,)))


def test_combine_contains_both():
    a = Rect((0, 3), (2, 7))
    b = Rect((-4, 5), (1, 9))
    c = a.combine(b)
    assert c == b.combine(a)
    assert c.low == (-4, 3)
    assert c.high == (2, 9)
    assert c.overlaps(a) and c.overlaps(b)


def test_combine_with_self_is_identity():
    a = Rect((1, 2, 3), (4, 5, 6))
    assert a.combine(a) == a


def test_volume():
    assert Rect((0, 0), (2, 3)).volume() == 6


def test_volume_grows_on_combine():
    a = Rect((0, 0), (2, 2))
    b = Rect((3, 1), (4, 5))
    combined = a.combine(b)
    assert combined.volume() >= a.volume()
    assert combined.volume() >= b.volume()


def test_degenerate_rect_has_no_volume():
    point = Rect((4, 4), (4, 4))
    assert point.volume() == point.spherical_volume() == 0


def test_spherical_volume_grows_on_combine():
    for dims in (2, 3, 4):
        a = Rect((0,) * dims, (1,) * dims)
        b = Rect((2,) * dims, (3,) * dims)
        combined = a.combine(b)
        assert combined.spherical_volume() > a.spherical_volume() > 0


def test_spherical_volume_is_translation_invariant():
    a = Rect((0, 0, 0), (2, 4, 6))
    b = Rect((10, 10, 10), (12, 14, 16))
    assert a.spherical_volume() == pytest.approx(b.spherical_volume())


def test_min_dist_inside_is_zero():
    assert Rect((0, 0), (10, 10)).min_dist((3, 7)) == 0


def test_min_dist_outside():
    assert Rect((0, 0), (0, 0)).min_dist((3, 4)) == 5


def test_min_dist_symmetric_sides():
    rect = Rect((0, 0), (10, 10))
    assert rect.min_dist((-6, 5)) == rect.min_dist((16, 5))
    assert rect.min_dist((5, -6)) == rect.min_dist((-6, 5))


def test_min_dist_dimension_mismatch():
    with pytest.raises(ValueError):
        Rect((0, 0), (1, 1)).min_dist((1, 2, 3))