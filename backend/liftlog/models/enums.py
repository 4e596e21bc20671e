from enum import Enum

LB_TO_KG = 0.453592

class WeightUnit(str, Enum):
    lb = "lb"
    kg = "kg"

    def convert(self, value: float, target: "WeightUnit") -> float:
        if self == target:
            return value
        if self == WeightUnit.lb:
            return value * LB_TO_KG
        return value / LB_TO_KG

class ExerciseCategory(str, Enum):
    compound = "compound"
    isolation = "isolation"
    cardio = "cardio"

class MuscleGroup(str, Enum):
    chest = "chest"
    back = "back"
    shoulders = "shoulders"
    biceps = "biceps"
    triceps = "triceps"
    quads = "quads"
    hamstrings = "hamstrings"
    glutes = "glutes"
    calves = "calves"
    abs = "abs"
    forearms = "forearms"

class EquipmentType(str, Enum):
    barbell = "barbell"
    dumbbell = "dumbbell"
    machine = "machine"
    cable = "cable"
    bodyweight = "bodyweight"
    other = "other"

class ProgressionTrigger(str, Enum):
    all_sets_completed = "allSetsCompleted"
    top_set_hit = "topSetHit"
