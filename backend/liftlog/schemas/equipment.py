from typing import Annotated
from pydantic import BaseModel, Field, StringConstraints, field_validator, model_validator
from liftlog.models.enums import WeightUnit

NameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)]
Weight = Annotated[float, Field(gt=0, le=2000)]

class BarbellCreate(BaseModel):
    name: NameStr
    weight: Weight
    unit: WeightUnit = WeightUnit.lb
    is_default: bool = False

class BarbellRead(BarbellCreate):
    id: int
    model_config = {"from_attributes": True}

class PlateCreate(BaseModel):
    weight: Weight
    unit: WeightUnit = WeightUnit.lb
    count: Annotated[int, Field(ge=0, le=100)] = 2
    color: Annotated[str, Field(max_length=30)] = "gray"

class PlateRead(PlateCreate):
    id: int
    model_config = {"from_attributes": True}

class DumbbellSetCreate(BaseModel):
    available_weights: list[Weight]
    unit: WeightUnit = WeightUnit.lb

    @field_validator("available_weights")
    @classmethod
    def sorted_unique(cls, v: list[float]) -> list[float]:
        return sorted(set(v))

class DumbbellSetRead(DumbbellSetCreate):
    id: int
    model_config = {"from_attributes": True}

class MachineCreate(BaseModel):
    name: NameStr
    min_weight: Annotated[float, Field(ge=0, le=2000)]
    max_weight: Weight
    increment: Weight
    unit: WeightUnit = WeightUnit.lb

    @model_validator(mode="after")
    def range_ordered(self):
        if self.min_weight > self.max_weight:
            raise ValueError("min_weight must be <= max_weight")
        return self

class MachineRead(MachineCreate):
    id: int
    model_config = {"from_attributes": True}

class CableAttachmentCreate(BaseModel):
    name: NameStr

class CableAttachmentRead(CableAttachmentCreate):
    id: int
    model_config = {"from_attributes": True}

class LoadedPlateRead(BaseModel):
    weight: float
    color: str
    model_config = {"from_attributes": True}

class LoadoutRead(BaseModel):
    target_weight: float
    bar_weight: float
    unit: WeightUnit
    plates_per_side: list[LoadedPlateRead]
    total_weight: float
    is_exact: bool
    difference: float
    summary: str
