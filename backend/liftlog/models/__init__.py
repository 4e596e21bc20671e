from .enums import WeightUnit, ExerciseCategory, MuscleGroup, EquipmentType, ProgressionTrigger
from .exercise import Exercise
from .routine import Routine, RoutineExercise, ProgressionRule
from .session import WorkoutSession
from .set_log import SetLog
from .equipment import Barbell, Plate, DumbbellSet, Machine, CableAttachment

__all__ = [
    "WeightUnit",
    "ExerciseCategory",
    "MuscleGroup",
    "EquipmentType",
    "ProgressionTrigger",
    "Exercise",
    "Routine",
    "RoutineExercise",
    "ProgressionRule",
    "WorkoutSession",
    "SetLog",
    "Barbell",
    "Plate",
    "DumbbellSet",
    "Machine",
    "CableAttachment",
]
