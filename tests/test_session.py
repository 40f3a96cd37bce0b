import logging

from fitcount.client.rep_logic import STAGE_DOWN, STAGE_UNKNOWN, ExerciseType
from fitcount.client.session import WorkoutSession, WorkoutSummary, WorkoutTimer, format_time, log_summary


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


def squat_rep(session, make_frame):
    for angle in (170, 100, 170):
        session.process_frame(make_frame(ExerciseType.SQUAT, angle))


def test_switching_exercise_preserves_independent_counts(make_frame):
    session = WorkoutSession()
    session.start_session()

    squat_rep(session, make_frame)
    assert session.state_for(ExerciseType.SQUAT).count == 1

    session.select_exercise(ExerciseType.PUSHUP)
    state = session.process_frame(make_frame(ExerciseType.PUSHUP, 170))
    assert state.count == 0
    assert session.counts[ExerciseType.SQUAT] == 1

    session.select_exercise("squat")
    assert session.state_for(ExerciseType.SQUAT).count == 1
    squat_rep(session, make_frame)
    assert session.counts[ExerciseType.SQUAT] == 2


def test_switching_exercise_keeps_stage(make_frame):
    session = WorkoutSession()
    session.start_session()
    session.process_frame(make_frame(ExerciseType.SQUAT, 100))

    session.select_exercise(ExerciseType.BICEP_CURL)
    session.select_exercise(ExerciseType.SQUAT)

    assert session.state_for(ExerciseType.SQUAT).stage == STAGE_DOWN
    state = session.process_frame(make_frame(ExerciseType.SQUAT, 170))
    assert state.count == 1


def test_start_session_resets_everything(make_frame):
    session = WorkoutSession()
    session.start_session()
    squat_rep(session, make_frame)
    session.report_count(ExerciseType.PUSHUP, 7)

    session.start_session()

    assert session.counts == {exercise: 0 for exercise in ExerciseType}
    assert all(state.stage == STAGE_UNKNOWN for state in session.states.values())
    assert session.active and not session.complete


def test_report_count_overwrites():
    session = WorkoutSession()
    session.report_count(ExerciseType.PUSHUP, 3)
    session.report_count(ExerciseType.PUSHUP, 5)
    assert session.counts[ExerciseType.PUSHUP] == 5


def test_on_rep_fires_only_on_completed_reps(make_frame):
    reps = []
    session = WorkoutSession(on_rep=lambda exercise, count: reps.append((exercise, count)))
    session.start_session()

    squat_rep(session, make_frame)
    session.process_frame(make_frame(ExerciseType.SQUAT, 170))

    assert reps == [(ExerciseType.SQUAT, 1)]


def test_process_frame_without_landmarks_does_not_raise():
    session = WorkoutSession()
    session.start_session()
    state = session.process_frame(None)
    assert state.count == 0


def test_end_session_returns_summary(make_frame):
    clock = FakeClock()
    session = WorkoutSession(timer=WorkoutTimer(clock=clock))
    session.start_session()
    squat_rep(session, make_frame)
    session.report_count(ExerciseType.BICEP_CURL, 4)
    clock.now += 75

    summary = session.end_session()

    assert not session.active and session.complete
    assert summary.total_reps == 5
    assert summary.elapsed_seconds == 75
    assert summary.elapsed_formatted == "1:15"

    clock.now += 30
    assert session.summary().elapsed_seconds == 75


def test_reset_returns_to_initial_state(make_frame):
    session = WorkoutSession()
    session.start_session()
    session.select_exercise(ExerciseType.PUSHUP)
    session.report_count(ExerciseType.PUSHUP, 2)

    session.reset()

    assert session.exercise == ExerciseType.SQUAT
    assert not session.active and not session.complete
    assert session.summary().total_reps == 0


def test_timer_lifecycle():
    clock = FakeClock()
    timer = WorkoutTimer(clock=clock)
    assert not timer.running
    assert timer.elapsed == 0

    timer.start()
    clock.now += 10
    assert timer.elapsed_seconds == 10

    timer.stop()
    clock.now += 5
    assert timer.elapsed_seconds == 10

    timer.start()
    clock.now += 2.5
    assert timer.elapsed_seconds == 12

    timer.reset()
    assert not timer.running
    assert timer.elapsed == 0


def test_format_time():
    assert format_time(0) == "0:00"
    assert format_time(9) == "0:09"
    assert format_time(125) == "2:05"


def test_summary_totals():
    summary = WorkoutSummary(counts={ExerciseType.SQUAT: 3, ExerciseType.PUSHUP: 2}, elapsed_seconds=61)
    assert summary.total_reps == 5
    assert summary.elapsed_formatted == "1:01"


def test_end_session_without_workout_changes_nothing():
    session = WorkoutSession()
    summary = session.end_session()
    assert summary.total_reps == 0
    assert not session.active and not session.complete


def test_log_summary_goes_through_logging(caplog):
    summary = WorkoutSummary(counts={ExerciseType.SQUAT: 3, ExerciseType.PUSHUP: 1}, elapsed_seconds=65)
    with caplog.at_level(logging.INFO, logger="fitcount.client.session"):
        log_summary(summary)
    messages = [record.getMessage() for record in caplog.records]
    assert messages == ["Squats: 3", "Push-ups: 1", "Total reps: 4", "Total time: 1:05"]
