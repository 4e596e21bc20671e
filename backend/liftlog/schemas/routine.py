from typing import Annotated
from datetime import datetime
from pydantic import BaseModel, Field, StringConstraints, field_validator, model_validator
from liftlog.models.enums import WeightUnit, ProgressionTrigger

NameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)]
SetCount = Annotated[int, Field(ge=1, le=20)]
RepCount = Annotated[int, Field(ge=1, le=100)]
Rpe = Annotated[float, Field(ge=1, le=10)]
RestSeconds = Annotated[int, Field(ge=0, le=900)]

class ProgressionRuleIn(BaseModel):
    increment_amount: Annotated[float, Field(gt=0, le=100)] = 5.0
    unit: WeightUnit = WeightUnit.lb
    trigger_type: ProgressionTrigger = ProgressionTrigger.all_sets_completed
    deload_percentage: Annotated[float, Field(ge=0, lt=1)] = 0.10
    deload_after_failures: Annotated[int, Field(ge=1, le=20)] = 3

class ProgressionRuleRead(BaseModel):
    increment_amount: float
    unit: WeightUnit
    trigger_type: ProgressionTrigger
    consecutive_failures: int
    deload_percentage: float
    deload_after_failures: int

    model_config = {"from_attributes": True}

class RoutineExerciseCreate(BaseModel):
    exercise_id: int
    order: Annotated[int, Field(ge=0)] | None = None
    target_sets: SetCount = 3
    target_rep_min: RepCount = 5
    target_rep_max: RepCount = 5
    target_rpe: Rpe | None = None
    rest_seconds: RestSeconds = 90
    progression_rule: ProgressionRuleIn | None = None

    @model_validator(mode="after")
    def rep_range_ordered(self):
        if self.target_rep_min > self.target_rep_max:
            raise ValueError("target_rep_min must be <= target_rep_max")
        return self

class RoutineExerciseUpdate(BaseModel):
    order: Annotated[int, Field(ge=0)] | None = None
    target_sets: SetCount | None = None
    target_rep_min: RepCount | None = None
    target_rep_max: RepCount | None = None
    target_rpe: Rpe | None = None
    rest_seconds: RestSeconds | None = None
    progression_rule: ProgressionRuleIn | None = None
    remove_progression_rule: bool = False

class RoutineExerciseRead(BaseModel):
    id: int
    exercise_id: int | None = None
    exercise_name: str | None = None
    order: int
    target_sets: int
    target_rep_min: int
    target_rep_max: int
    rep_range_display: str
    target_rpe: float | None = None
    rest_seconds: int
    next_target_weight: float | None = None
    progression_rule: ProgressionRuleRead | None = None

    model_config = {"from_attributes": True}

class RoutineCreate(BaseModel):
    name: NameStr
    is_template: bool = False
    source: Annotated[str, Field(max_length=120)] | None = "Custom"

    @field_validator("source")
    @classmethod
    def blank_source_is_none(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            return None
        return v

class RoutineRead(BaseModel):
    id: int
    name: str
    is_template: bool
    source: str | None = None
    created_at: datetime | None = None
    exercises: list[RoutineExerciseRead] = Field(default_factory=list)

    model_config = {"from_attributes": True}
