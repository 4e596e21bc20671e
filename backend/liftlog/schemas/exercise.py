from typing import Annotated
from pydantic import BaseModel, Field, field_validator
from liftlog.models.enums import ExerciseCategory, EquipmentType, MuscleGroup

NameStr = Annotated[str, Field(max_length=120)]

class ExerciseCreate(BaseModel):
    name: NameStr
    category: ExerciseCategory = ExerciseCategory.compound
    muscle_groups: list[MuscleGroup] = Field(default_factory=list)
    equipment_type: EquipmentType = EquipmentType.barbell
    notes: Annotated[str, Field(max_length=500)] = ""

    @field_validator("name")
    @classmethod
    def name_non_blank(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("name cannot be blank")
        return v2

class ExerciseRead(BaseModel):
    id: int
    name: str
    category: ExerciseCategory
    muscle_groups: list[str]
    equipment_type: EquipmentType
    notes: str
    is_custom: bool

    model_config = {"from_attributes": True}
