# fitcount/backend/main.py
import logging
from threading import Lock

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from fitcount.backend.models import (
    CountReport,
    ExerciseSelection,
    FrameIn,
    RepStateOut,
    SessionSnapshot,
    SummaryOut,
)
from fitcount.client.session import WorkoutSession, WorkoutSummary

logger = logging.getLogger(__name__)

app = FastAPI(title="fitcount session service")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

workout = WorkoutSession()
_lock = Lock()


def _snapshot() -> SessionSnapshot:
    return SessionSnapshot(
        active=workout.active,
        complete=workout.complete,
        exercise=workout.exercise,
        counts=dict(workout.counts),
        elapsed_seconds=workout.timer.elapsed_seconds,
    )


def _summary_out(summary: WorkoutSummary) -> SummaryOut:
    return SummaryOut(
        counts=summary.counts,
        total_reps=summary.total_reps,
        elapsed_seconds=summary.elapsed_seconds,
        elapsed_formatted=summary.elapsed_formatted,
    )


@app.get("/")
def health_check():
    return {"status": "ok"}


@app.get("/session", response_model=SessionSnapshot)
def get_session():
    with _lock:
        return _snapshot()


@app.post("/session/start", response_model=SessionSnapshot)
def start_session():
    with _lock:
        workout.start_session()
        return _snapshot()


@app.post("/session/end", response_model=SummaryOut)
def end_session():
    with _lock:
        if not workout.active:
            raise HTTPException(status_code=409, detail="No active workout to end.")
        return _summary_out(workout.end_session())


@app.post("/session/reset", response_model=SessionSnapshot)
def reset_session():
    with _lock:
        workout.reset()
        return _snapshot()


@app.post("/exercise", response_model=SessionSnapshot)
def select_exercise(selection: ExerciseSelection):
    with _lock:
        workout.select_exercise(selection.exercise)
        return _snapshot()


@app.post("/counts", response_model=SessionSnapshot)
def report_count(report: CountReport):
    with _lock:
        workout.report_count(report.exercise, report.count)
        return _snapshot()


@app.post("/frame", response_model=RepStateOut)
def process_frame(frame: FrameIn):
    with _lock:
        if not workout.active:
            logger.warning("Frame rejected: no active workout")
            raise HTTPException(status_code=409, detail="No active workout. Start a session first.")
        state = workout.process_frame(frame.landmarks)
        return RepStateOut(
            exercise=workout.exercise,
            count=state.count,
            stage=state.stage,
            feedback=state.feedback,
            confidence=state.confidence,
        )


@app.get("/summary", response_model=SummaryOut)
def get_summary():
    with _lock:
        return _summary_out(workout.summary())
