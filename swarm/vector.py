"""Small 2D vector helpers shared by the particle behaviors."""

import math
import numpy as np


def magnitude(v: np.ndarray) -> float:
    """Euclidean length of a 2D vector."""
    return math.sqrt(v[0] * v[0] + v[1] * v[1])


def set_magnitude(v: np.ndarray, length: float) -> np.ndarray:
    """
    Return ``v`` rescaled to ``length``.

    A zero vector stays zero instead of producing NaNs.
    """
    mag = magnitude(v)
    if mag == 0:
        return np.zeros(2)
    return v * (length / mag)


def limit(v: np.ndarray, max_mag: float) -> np.ndarray:
    """Clamp the magnitude of ``v`` to ``max_mag``."""
    mag_sq = v[0] * v[0] + v[1] * v[1]
    if mag_sq > max_mag * max_mag:
        return v * (max_mag / math.sqrt(mag_sq))
    return v


def map_range(value: float, in_min: float, in_max: float,
              out_min: float, out_max: float) -> float:
    """Linearly re-map ``value`` from one range onto another (unclamped)."""
    return (value - in_min) / (in_max - in_min) * (out_max - out_min) + out_min


def random_unit(rng: np.random.Generator) -> np.ndarray:
    """Unit vector pointing in a uniformly random direction."""
    angle = rng.uniform(0.0, 2.0 * math.pi)
    return np.array([math.cos(angle), math.sin(angle)])
