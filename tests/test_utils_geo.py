import pytest

from geomonitor.utils.geo_utils import bounding_box, centroid, distances_km
from geomonitor.utils.math_utils import round_percentage


def test_distance_to_itself_is_zero():
    assert distances_km((45.0, 9.0), [45.0], [9.0])[0] == pytest.approx(0.0, abs=1e-9)


def test_hundredth_of_degree_latitude_is_about_1_1_km():
    assert distances_km((45.0, 9.0), [45.01], [9.0])[0] == pytest.approx(1.113, rel=1e-2)


def test_distances_are_vectorised():
    dists = distances_km((45.0, 9.0), [45.0, 45.01, 45.02], [9.0, 9.0, 9.0])
    assert len(dists) == 3
    assert dists[0] < dists[1] < dists[2]
    assert dists[2] > 2.0


def test_bounding_box_contains_circle():
    origin = (45.0, 9.0)
    min_lat, max_lat, min_lng, max_lng = bounding_box(origin, 2.0)
    assert min_lat < 45.0 < max_lat
    assert min_lng < 9.0 < max_lng
    # точки ровно на границе радиуса по осям должны попасть в прямоугольник
    edges = distances_km(origin, [max_lat, 45.0], [9.0, max_lng])
    assert all(edges >= 2.0)


def test_bounding_box_near_pole_spans_all_longitudes():
    _, max_lat, min_lng, max_lng = bounding_box((89.999, 0.0), 5.0)
    assert max_lat == 90.0
    assert (min_lng, max_lng) == (-180.0, 180.0)


def test_centroid():
    assert centroid([(45.0, 9.0), (45.02, 9.02)]) == pytest.approx((45.01, 9.01))
    with pytest.raises(ValueError):
        centroid([])


def test_round_percentage():
    assert round_percentage(99.96) == 100.0
    assert round_percentage(33.333) == 33.3
    assert round_percentage(-0.1) == 0.0
