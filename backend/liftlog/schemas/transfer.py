from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

class _Camel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class ExportableExercise(_Camel):
    exercise_name: str = Field(min_length=1, max_length=120)
    order: int = Field(ge=0)
    target_sets: int = Field(ge=1, le=20)
    target_rep_min: int = Field(ge=1, le=100)
    target_rep_max: int = Field(ge=1, le=100)
    target_rpe: float | None = None
    rest_seconds: int = Field(ge=0, le=900)
    increment_amount: float | None = None
    increment_unit: str | None = None

class ExportableRoutine(_Camel):
    name: str = Field(min_length=1, max_length=120)
    source: str | None = None
    exercises: list[ExportableExercise] = Field(default_factory=list)
