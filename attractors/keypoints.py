"""Pick the facial feature points that particles are attracted to."""

from typing import List, Sequence, Tuple

from config import particles as config

# Feature groups in the order their points are emitted
FEATURE_ORDER = (
    "left_eye", "right_eye", "lips", "nose",
    "left_eyebrow", "right_eyebrow", "face_contour",
)


def _xy(landmark) -> Tuple[float, float]:
    """(x, y) from either an indexable point or an object with x/y attributes."""
    if hasattr(landmark, "x") and hasattr(landmark, "y"):
        return float(landmark.x), float(landmark.y)
    return float(landmark[0]), float(landmark[1])


def extract_keypoints(landmarks: Sequence) -> List[Tuple[float, float]]:
    """
    Select feature keypoints from a full 468-point face mesh.

    Args:
        landmarks: Landmark list indexed by FaceMesh point id. Points may be
            (x, y), (x, y, z) or objects with ``x``/``y`` attributes.

    Returns:
        (x, y) tuples for the eyes, lips, nose, eyebrows and jaw contour.
        Indices missing from ``landmarks`` are skipped.
    """
    if landmarks is None or len(landmarks) == 0:
        return []

    keypoints = []
    for feature in FEATURE_ORDER:
        indices, spacing = config.KEYPOINTS[feature]
        for idx in indices[::spacing]:
            if idx < len(landmarks) and landmarks[idx] is not None:
                keypoints.append(_xy(landmarks[idx]))

    return keypoints
