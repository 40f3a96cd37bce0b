import math

import pytest

from fitcount.client.pose_utils import NUM_LANDMARKS, Landmark
from fitcount.client.rep_logic import EXERCISE_CONFIG, ExerciseType


def frame_with_angle(exercise, angle_deg):
    """33-landmark frame whose joint triple for `exercise` forms `angle_deg` at the middle joint."""
    a_idx, b_idx, c_idx = EXERCISE_CONFIG[ExerciseType(exercise)]["joints"]
    landmarks = [Landmark(0.5, 0.5) for _ in range(NUM_LANDMARKS)]
    bx, by = 0.5, 0.5
    theta = math.radians(angle_deg)
    landmarks[a_idx] = Landmark(bx + 0.2, by)
    landmarks[b_idx] = Landmark(bx, by)
    landmarks[c_idx] = Landmark(bx + 0.2 * math.cos(theta), by + 0.2 * math.sin(theta))
    return landmarks


@pytest.fixture
def make_frame():
    return frame_with_angle
