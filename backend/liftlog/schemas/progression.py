from pydantic import BaseModel

class ProgressionResultRead(BaseModel):
    exercise_name: str
    previous_weight: float
    new_weight: float
    passed: bool
    deloaded: bool
    message: str

    model_config = {"from_attributes": True}
