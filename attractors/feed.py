"""Per-tick attractor feed: tracked face keypoints, or the fallback face."""

import numpy as np
from typing import Callable, Optional, Sequence

from .fallback import FallbackFace
from .keypoints import extract_keypoints

TRACKING = "tracking"
FALLBACK = "fallback"


class AttractorFeed:
    """
    Chooses where each tick's attractor points come from.

    ``landmark_source`` is any callable returning the latest full face mesh
    landmark list, or ``None`` when no face is visible. Without a source, or
    once the source raises, the feed switches to the fallback face for good.
    """

    def __init__(self, width: float, height: float,
                 landmark_source: Optional[Callable[[], Optional[Sequence]]] = None,
                 rng: Optional[np.random.Generator] = None):
        self.landmark_source = landmark_source
        self.fallback = FallbackFace(width, height, rng=rng)
        self.mode = TRACKING if landmark_source is not None else FALLBACK
        self.last_error: Optional[str] = None
        self.landmark_count = 0

        if self.mode == FALLBACK:
            print("[Tracking] No landmark source, using simulated face")

    def _switch_to_fallback(self, error: Exception):
        self.mode = FALLBACK
        self.last_error = str(error)
        print(f"[Tracking] Landmark source failed ({error}), switching to fallback mode")

    def points(self) -> Sequence:
        """Attractor points for the coming tick."""
        if self.mode == TRACKING:
            try:
                landmarks = self.landmark_source()
            except Exception as e:
                self._switch_to_fallback(e)
            else:
                if landmarks is None:
                    self.landmark_count = 0
                    return []
                self.landmark_count = len(landmarks)
                return extract_keypoints(landmarks)

        self.landmark_count = 0
        return self.fallback.points

    def advance(self):
        """Called after the simulation tick; lets the fallback face drift."""
        if self.mode == FALLBACK:
            self.fallback.step()

    def resize(self, width: float, height: float):
        self.fallback.resize(width, height)
