# fitcount/backend/models.py
from pydantic import BaseModel, Field
from typing import Dict, List

from fitcount.client.rep_logic import ExerciseType


class LandmarkIn(BaseModel):
    x: float
    y: float


class FrameIn(BaseModel):
    landmarks: List[LandmarkIn] = []


class ExerciseSelection(BaseModel):
    exercise: ExerciseType


class CountReport(BaseModel):
    exercise: ExerciseType
    count: int = Field(ge=0)


class RepStateOut(BaseModel):
    exercise: ExerciseType
    count: int
    stage: str
    feedback: str
    confidence: float


class SessionSnapshot(BaseModel):
    active: bool
    complete: bool
    exercise: ExerciseType
    counts: Dict[ExerciseType, int]
    elapsed_seconds: int


class SummaryOut(BaseModel):
    counts: Dict[ExerciseType, int]
    total_reps: int
    elapsed_seconds: int
    elapsed_formatted: str
