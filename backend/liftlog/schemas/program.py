from typing import Annotated, Literal
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from liftlog.models.enums import EquipmentType

Goal = Literal["strength", "hypertrophy", "generalFitness", "powerlifting", "athleticPerformance"]
Experience = Literal["beginner", "intermediate", "advanced"]
SessionMinutes = Literal[30, 45, 60, 75, 90]

GOAL_NAMES = {
    "strength": "Strength",
    "hypertrophy": "Hypertrophy",
    "generalFitness": "General Fitness",
    "powerlifting": "Powerlifting",
    "athleticPerformance": "Athletic Performance",
}

class _Camel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class Questionnaire(BaseModel):
    goal: Goal = "strength"
    experience: Experience = "beginner"
    days_per_week: Annotated[int, Field(ge=1, le=7)] = 3
    available_equipment: list[EquipmentType] = Field(
        default_factory=lambda: [EquipmentType.barbell, EquipmentType.dumbbell]
    )
    session_minutes: SessionMinutes = 60
    movements_to_avoid: list[str] = Field(default_factory=list)

class ProgramExercise(_Camel):
    exercise_name: str
    sets: int
    rep_min: int
    rep_max: int
    rest_seconds: int
    equipment_type: str

class ProgramDay(_Camel):
    name: str
    exercises: list[ProgramExercise]

class ProgramTemplate(_Camel):
    id: str
    name: str
    description: str
    goals: list[str]
    experience_levels: list[str]
    days_per_week: int
    estimated_session_minutes: int
    required_equipment: list[str]
    days: list[ProgramDay]

class ProgramRecommendation(BaseModel):
    template: ProgramTemplate
    score: float
    rationale: list[str]
