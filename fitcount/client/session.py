# fitcount/client/session.py

import time
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Sequence

from .rep_logic import ExerciseType, RepState, classify

logger = logging.getLogger(__name__)


def format_time(seconds: int) -> str:
    mins, secs = divmod(int(seconds), 60)
    return f"{mins}:{secs:02d}"


class WorkoutTimer:
    """
    Workout clock with an explicit start/stop lifecycle.
    Elapsed time is read from `clock`, no background thread is involved.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._started_at: Optional[float] = None
        self._accumulated = 0.0

    @property
    def running(self) -> bool:
        return self._started_at is not None

    def start(self):
        if self._started_at is None:
            self._started_at = self._clock()

    def stop(self):
        if self._started_at is not None:
            self._accumulated += self._clock() - self._started_at
            self._started_at = None

    def reset(self):
        self._started_at = None
        self._accumulated = 0.0

    @property
    def elapsed(self) -> float:
        if self._started_at is None:
            return self._accumulated
        return self._accumulated + (self._clock() - self._started_at)

    @property
    def elapsed_seconds(self) -> int:
        return int(self.elapsed)


@dataclass
class WorkoutSummary:
    counts: Dict[ExerciseType, int]
    elapsed_seconds: int
    total_reps: int = field(init=False)
    elapsed_formatted: str = field(init=False)

    def __post_init__(self):
        self.total_reps = sum(self.counts.values())
        self.elapsed_formatted = format_time(self.elapsed_seconds)


def log_summary(summary: WorkoutSummary):
    for exercise, count in summary.counts.items():
        logger.info("%s: %d", exercise.display_name, count)
    logger.info("Total reps: %d", summary.total_reps)
    logger.info("Total time: %s", summary.elapsed_formatted)


def _zero_counts() -> Dict[ExerciseType, int]:
    return {exercise: 0 for exercise in ExerciseType}


def _fresh_states() -> Dict[ExerciseType, RepState]:
    return {exercise: RepState() for exercise in ExerciseType}


class WorkoutSession:
    """
    Owns the per-exercise rep states, the session counts and the workout timer.

    Every exercise keeps its own RepState: switching exercise never resets
    anything, so going back to an exercise resumes its count and stage.
    `on_rep(exercise, count)` is called whenever a frame completes a rep.
    """

    def __init__(
        self,
        on_rep: Optional[Callable[[ExerciseType, int], None]] = None,
        timer: Optional[WorkoutTimer] = None,
    ):
        self.on_rep = on_rep
        self.timer = timer or WorkoutTimer()
        self.exercise = ExerciseType.SQUAT
        self.active = False
        self.complete = False
        self.counts = _zero_counts()
        self.states = _fresh_states()

    # ---------- session control ----------

    def start_session(self):
        self.counts = _zero_counts()
        self.states = _fresh_states()
        self.timer.reset()
        self.timer.start()
        self.active = True
        self.complete = False
        logger.info("Workout started (exercise=%s)", self.exercise.value)

    def end_session(self) -> WorkoutSummary:
        """Finish the running workout. Without one, nothing changes."""
        if not self.active:
            logger.warning("end_session called with no active workout")
            return self.summary()
        self.timer.stop()
        self.active = False
        self.complete = True
        summary = self.summary()
        logger.info(
            "Workout finished: %d reps in %s", summary.total_reps, summary.elapsed_formatted
        )
        return summary

    def reset(self):
        self.timer.reset()
        self.active = False
        self.complete = False
        self.counts = _zero_counts()
        self.states = _fresh_states()
        self.exercise = ExerciseType.SQUAT

    def select_exercise(self, exercise):
        self.exercise = ExerciseType(exercise)
        logger.info("Exercise selected: %s", self.exercise.value)

    def report_count(self, exercise, count: int):
        # Classifiers return absolute totals, so this overwrites.
        self.counts[ExerciseType(exercise)] = count

    def state_for(self, exercise) -> RepState:
        return self.states[ExerciseType(exercise)]

    def summary(self) -> WorkoutSummary:
        return WorkoutSummary(counts=dict(self.counts), elapsed_seconds=self.timer.elapsed_seconds)

    # ---------- frame pipeline ----------

    def process_frame(self, landmarks: Optional[Sequence]) -> RepState:
        exercise = self.exercise
        prev_state = self.states[exercise]
        new_state = classify(exercise, landmarks, prev_state)
        self.states[exercise] = new_state

        if new_state.count != prev_state.count:
            self.report_count(exercise, new_state.count)
            if new_state.count > prev_state.count and self.on_rep is not None:
                self.on_rep(exercise, new_state.count)

        logger.debug(
            "%s frame: stage=%s conf=%.2f feedback=%r",
            exercise.value, new_state.stage, new_state.confidence, new_state.feedback,
        )
        return new_state
