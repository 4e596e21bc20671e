from typing import Annotated
from datetime import datetime
from pydantic import BaseModel, Field
from liftlog.models.enums import WeightUnit
from liftlog.schemas.progression import ProgressionResultRead

Reps = Annotated[int, Field(ge=0, le=1000)]
NonNegFloat = Annotated[float, Field(ge=0, le=2000)]

class SetLogRead(BaseModel):
    id: int
    exercise_id: int | None = None
    exercise_name: str | None = None
    set_number: int
    target_weight: float
    actual_weight: float
    target_reps: int
    actual_reps: int
    unit: WeightUnit
    is_warmup: bool
    rpe: float | None = None
    is_completed: bool
    timestamp: datetime

    model_config = {"from_attributes": True}

class WorkoutSessionRead(BaseModel):
    id: int
    routine_id: int | None = None
    start_time: datetime
    end_time: datetime | None = None
    is_completed: bool
    notes: str
    duration_display: str
    set_logs: list[SetLogRead] = Field(default_factory=list)

    model_config = {"from_attributes": True}

class WorkoutSessionSummary(BaseModel):
    id: int
    routine_id: int | None = None
    start_time: datetime
    end_time: datetime | None = None
    duration_display: str

    model_config = {"from_attributes": True}

class SessionPage(BaseModel):
    items: list[WorkoutSessionSummary]
    total: int
    limit: int
    offset: int

class StartWorkout(BaseModel):
    routine_id: int

class CompleteSet(BaseModel):
    actual_reps: Reps
    actual_weight: NonNegFloat
    rpe: Annotated[float, Field(ge=1, le=10)] | None = None

class WeightDelta(BaseModel):
    delta: Annotated[float, Field(ge=-500, le=500)] = 5.0

class WeightValue(BaseModel):
    weight: NonNegFloat

class ExtendRest(BaseModel):
    # None -> configured default step
    seconds: Annotated[int, Field(ge=-600, le=600)] | None = None

class WorkoutStateRead(BaseModel):
    version: int
    status: str
    session_id: int | None = None
    routine_id: int | None = None
    routine_name: str | None = None
    current_exercise_index: int = 0
    exercise_count: int = 0
    current_routine_exercise_id: int | None = None
    current_exercise_name: str | None = None
    rest_seconds: int | None = None
    current_set_logs: list[SetLogRead] = Field(default_factory=list)
    total_sets: int = 0
    completed_sets: int = 0
    rest_remaining: int = 0
    is_resting: bool = False

class FinishResponse(BaseModel):
    session: WorkoutSessionRead
    results: list[ProgressionResultRead]
