# fitcount/client/pose_utils.py

from dataclasses import dataclass
from typing import Mapping, Optional, Sequence, Tuple

import numpy as np

Point = Tuple[float, float]

# MediaPipe Pose indices (right side of the body)
RIGHT_SHOULDER = 12
RIGHT_ELBOW = 14
RIGHT_WRIST = 16
RIGHT_HIP = 24
RIGHT_KNEE = 26
RIGHT_ANKLE = 28

NUM_LANDMARKS = 33


@dataclass(frozen=True)
class Landmark:
    x: float
    y: float


def angle_at(a: Point, b: Point, c: Point) -> float:
    """
    Returns the angle (in degrees) at point b formed by points a-b-c,
    always in [0, 180].
    """
    radians = np.arctan2(c[1] - b[1], c[0] - b[0]) - np.arctan2(a[1] - b[1], a[0] - b[0])
    angle = abs(np.degrees(radians))
    if angle > 180.0:
        angle = 360.0 - angle
    return float(angle)


def coordinate_of(landmarks: Optional[Sequence], index: int) -> Point:
    """
    (x, y) of the landmark at `index`.
    Entries may be objects with .x/.y or {"x": .., "y": ..} mappings.
    Missing frames, out-of-range indices, empty slots and malformed
    entries give (0, 0).
    """
    if not landmarks or index < 0 or index >= len(landmarks):
        return 0.0, 0.0
    lm = landmarks[index]
    if lm is None:
        return 0.0, 0.0
    try:
        if isinstance(lm, Mapping):
            return float(lm["x"]), float(lm["y"])
        return float(lm.x), float(lm.y)
    except (AttributeError, KeyError, TypeError, ValueError):
        return 0.0, 0.0
