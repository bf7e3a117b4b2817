"""Synthetic face-shaped attractor cloud used when no tracker is available."""

import math
import numpy as np
from typing import Optional

from config import particles as config


def face_pattern(width: float, height: float) -> np.ndarray:
    """
    Build the face-shaped point set for a canvas.

    Order: left eye, right eye, nose, two mouth corners, then the outline
    going around the face counter-clockwise from angle 0.
    """
    f = config.FALLBACK
    cx, cy = width / 2, height / 2
    face_size = min(width, height) * f["face_scale"]
    eye_dx, eye_dy = f["eye_offset"]
    mouth_dx, mouth_dy = f["mouth_offset"]

    points = [
        (cx - face_size * eye_dx, cy - face_size * eye_dy),
        (cx + face_size * eye_dx, cy - face_size * eye_dy),
        (cx, cy),
        (cx - face_size * mouth_dx, cy + face_size * mouth_dy),
        (cx + face_size * mouth_dx, cy + face_size * mouth_dy),
    ]

    radius = face_size * f["outline_radius"]
    step = f["outline_step"]
    for k in range(int(round(2 * math.pi / step))):
        angle = k * step
        points.append((cx + math.cos(angle) * radius, cy + math.sin(angle) * radius))

    return np.array(points, dtype=np.float64)


class FallbackFace:
    """Face pattern that drifts by a small random walk every tick."""

    def __init__(self, width: float, height: float,
                 rng: Optional[np.random.Generator] = None):
        self.width = width
        self.height = height
        self.rng = rng if rng is not None else np.random.default_rng()
        self.jitter = config.FALLBACK["jitter"]
        self.points = face_pattern(width, height)

    def reset(self):
        """Snap the points back to the undisturbed face pattern."""
        self.points = face_pattern(self.width, self.height)

    def resize(self, width: float, height: float):
        self.width = width
        self.height = height
        self.reset()

    def step(self):
        """Nudge every point by a uniform step in [-jitter, jitter] per axis."""
        if len(self.points) == 0:
            self.reset()
            return
        self.points += self.rng.uniform(-self.jitter, self.jitter, size=self.points.shape)
