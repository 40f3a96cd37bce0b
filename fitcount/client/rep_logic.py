# fitcount/client/rep_logic.py

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Dict, Optional, Sequence

from .pose_utils import (
    RIGHT_ANKLE,
    RIGHT_ELBOW,
    RIGHT_HIP,
    RIGHT_KNEE,
    RIGHT_SHOULDER,
    RIGHT_WRIST,
    angle_at,
    coordinate_of,
)

logger = logging.getLogger(__name__)

STAGE_UP = "up"
STAGE_DOWN = "down"
STAGE_UNKNOWN = "unknown"

REP_FEEDBACK = "Good rep!"
SQUAT_DEPTH_FEEDBACK = "Go lower for full range of motion"
SQUAT_FULL_DEPTH_ANGLE = 90.0


class ExerciseType(str, Enum):
    SQUAT = "squat"
    PUSHUP = "pushup"
    BICEP_CURL = "bicep_curl"

    @property
    def display_name(self) -> str:
        return DISPLAY_NAMES[self]


DISPLAY_NAMES = {
    ExerciseType.SQUAT: "Squats",
    ExerciseType.PUSHUP: "Push-ups",
    ExerciseType.BICEP_CURL: "Bicep Curls",
}


@dataclass
class RepState:
    count: int = 0
    stage: str = STAGE_UNKNOWN
    feedback: str = ""
    confidence: float = 0.0


# ----------------- Per-exercise configuration -----------------
# "extended" is the straight-joint posture (angle above threshold),
# "flexed" the bent one (angle below threshold). Confidence ramps
# linearly from the threshold over `*_span` degrees.
EXERCISE_CONFIG: Dict[ExerciseType, Dict[str, Any]] = {
    ExerciseType.SQUAT: {
        "joints": (RIGHT_HIP, RIGHT_KNEE, RIGHT_ANKLE),
        "extended_stage": STAGE_UP,
        "extended_threshold": 160.0,
        "extended_span": 20.0,
        "extended_feedback": "Stand straight",
        "flexed_stage": STAGE_DOWN,
        "flexed_threshold": 120.0,
        "flexed_span": 30.0,
        "flexed_feedback": "Good depth",
        "rep_from": STAGE_DOWN,
        "rep_to": STAGE_UP,
    },
    ExerciseType.PUSHUP: {
        "joints": (RIGHT_SHOULDER, RIGHT_ELBOW, RIGHT_WRIST),
        "extended_stage": STAGE_UP,
        "extended_threshold": 160.0,
        "extended_span": 20.0,
        "extended_feedback": "Arms extended",
        "flexed_stage": STAGE_DOWN,
        "flexed_threshold": 90.0,
        "flexed_span": 30.0,
        "flexed_feedback": "Good depth",
        "rep_from": STAGE_DOWN,
        "rep_to": STAGE_UP,
    },
    ExerciseType.BICEP_CURL: {
        # Right arm only
        "joints": (RIGHT_SHOULDER, RIGHT_ELBOW, RIGHT_WRIST),
        "extended_stage": STAGE_DOWN,
        "extended_threshold": 150.0,
        "extended_span": 30.0,
        "extended_feedback": "Arm extended",
        "flexed_stage": STAGE_UP,
        "flexed_threshold": 60.0,
        "flexed_span": 30.0,
        "flexed_feedback": "Good curl",
        "rep_from": STAGE_UP,
        "rep_to": STAGE_DOWN,
    },
}


def _ramp(distance: float, span: float) -> float:
    return max(0.0, min(1.0, distance / span))


def joint_angle(exercise: ExerciseType, landmarks: Optional[Sequence]) -> float:
    a_idx, b_idx, c_idx = EXERCISE_CONFIG[exercise]["joints"]
    return angle_at(
        coordinate_of(landmarks, a_idx),
        coordinate_of(landmarks, b_idx),
        coordinate_of(landmarks, c_idx),
    )


def _update_rep_state(exercise: ExerciseType, angle: float, prev_state: RepState) -> RepState:
    """
    Generic up/down state machine shared by all exercises.

    - Outside both thresholds the stage is carried forward, with
      zero confidence and no feedback.
    - A rep is counted on the configured rep_from -> rep_to transition.
    """
    cfg = EXERCISE_CONFIG[exercise]

    stage = prev_state.stage
    count = prev_state.count
    feedback = ""
    confidence = 0.0

    if angle > cfg["extended_threshold"]:
        stage = cfg["extended_stage"]
        confidence = _ramp(angle - cfg["extended_threshold"], cfg["extended_span"])
        feedback = cfg["extended_feedback"]
    elif angle < cfg["flexed_threshold"]:
        stage = cfg["flexed_stage"]
        confidence = _ramp(cfg["flexed_threshold"] - angle, cfg["flexed_span"])
        feedback = cfg["flexed_feedback"]

    if stage == cfg["rep_to"] and prev_state.stage == cfg["rep_from"]:
        count += 1
        feedback = REP_FEEDBACK
        logger.info("%s rep completed (count=%d, angle=%.1f)", exercise.value, count, angle)

    return replace(prev_state, count=count, stage=stage, feedback=feedback, confidence=confidence)


def detect_squat(landmarks: Optional[Sequence], prev_state: RepState) -> RepState:
    angle = joint_angle(ExerciseType.SQUAT, landmarks)
    state = _update_rep_state(ExerciseType.SQUAT, angle, prev_state)

    # Down but not yet at parallel
    if state.stage == STAGE_DOWN and angle > SQUAT_FULL_DEPTH_ANGLE:
        state.feedback = SQUAT_DEPTH_FEEDBACK
    return state


def detect_pushup(landmarks: Optional[Sequence], prev_state: RepState) -> RepState:
    angle = joint_angle(ExerciseType.PUSHUP, landmarks)
    return _update_rep_state(ExerciseType.PUSHUP, angle, prev_state)


def detect_bicep_curl(landmarks: Optional[Sequence], prev_state: RepState) -> RepState:
    angle = joint_angle(ExerciseType.BICEP_CURL, landmarks)
    return _update_rep_state(ExerciseType.BICEP_CURL, angle, prev_state)


CLASSIFIERS: Dict[ExerciseType, Callable[[Optional[Sequence], RepState], RepState]] = {
    ExerciseType.SQUAT: detect_squat,
    ExerciseType.PUSHUP: detect_pushup,
    ExerciseType.BICEP_CURL: detect_bicep_curl,
}


def classify(exercise_type, landmarks: Optional[Sequence], prev_state: RepState) -> RepState:
    """
    Run the classifier for `exercise_type` (enum member or its string value).
    Unknown exercise types leave the state untouched.
    """
    try:
        exercise = ExerciseType(exercise_type)
    except ValueError:
        logger.debug("No classifier for exercise %r", exercise_type)
        return prev_state
    return CLASSIFIERS[exercise](landmarks, prev_state)
