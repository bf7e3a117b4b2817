import numpy as np
import pytest

from swarm.vector import limit, magnitude, map_range, random_unit, set_magnitude


def test_magnitude():
    assert magnitude(np.array([3.0, 4.0])) == pytest.approx(5.0)


def test_limit_clamps_long_vectors_only():
    assert np.allclose(limit(np.array([3.0, 4.0]), 1.0), [0.6, 0.8])
    short = np.array([0.1, 0.0])
    assert np.array_equal(limit(short, 1.0), short)


def test_set_magnitude_of_zero_vector_stays_zero():
    result = set_magnitude(np.zeros(2), 4.0)
    assert np.array_equal(result, np.zeros(2))
    assert not np.isnan(result).any()


def test_set_magnitude_rescales():
    result = set_magnitude(np.array([0.0, 2.0]), 4.0)
    assert np.allclose(result, [0.0, 4.0])


def test_map_range_inverts_for_attraction_strength():
    assert map_range(0, 0, 150, 2.5, 0.5) == pytest.approx(2.5)
    assert map_range(150, 0, 150, 2.5, 0.5) == pytest.approx(0.5)
    assert map_range(75, 0, 150, 2.5, 0.5) == pytest.approx(1.5)


def test_random_unit_has_length_one(rng):
    for _ in range(20):
        assert magnitude(random_unit(rng)) == pytest.approx(1.0)
