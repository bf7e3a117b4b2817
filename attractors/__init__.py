"""Attractor point sources: face mesh keypoints and a synthetic fallback face."""

from .fallback import FallbackFace, face_pattern
from .feed import AttractorFeed
from .keypoints import extract_keypoints

__all__ = ["AttractorFeed", "FallbackFace", "extract_keypoints", "face_pattern"]
