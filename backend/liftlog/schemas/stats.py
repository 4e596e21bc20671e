from datetime import date
from pydantic import BaseModel

class WeeklyStat(BaseModel):
    week_start: date
    label: str
    workouts: int
    sets: int
    volume: float

class ExerciseProgressPoint(BaseModel):
    session_id: int
    date: date
    max_weight: float
    volume: float
    max_reps: int

class ExerciseProgress(BaseModel):
    exercise_id: int
    exercise_name: str | None = None
    points: list[ExerciseProgressPoint]
    starting_weight: float | None = None
    current_weight: float | None = None
    change_percent: float | None = None
