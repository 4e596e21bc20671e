# liftlog/services/seed.py
from __future__ import annotations
import json
import logging
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, TypeAdapter
from sqlalchemy.orm import Session

from liftlog.models import Barbell, Plate, Exercise
from liftlog.models.enums import ExerciseCategory, EquipmentType, MuscleGroup, WeightUnit
from liftlog.repositories.equipment_repo import EquipmentRepository
from liftlog.repositories.exercise_repo import ExerciseRepository

log = logging.getLogger(__name__)

LIBRARY_PATH = Path(__file__).resolve().parents[1] / "data" / "exercise_library.json"

DEFAULT_BAR = {"name": "Olympic Barbell", "weight": 45.0, "unit": WeightUnit.lb, "is_default": True}

# (weight, count, color): standard Olympic set
DEFAULT_PLATES = [
    (45.0, 4, "blue"),
    (35.0, 2, "yellow"),
    (25.0, 2, "green"),
    (10.0, 4, "white"),
    (5.0, 4, "red"),
    (2.5, 4, "gray"),
]

class ExerciseSeed(BaseModel):
    name: str
    category: str
    muscleGroups: list[str]
    equipmentType: str
    notes: str = ""

@lru_cache(maxsize=1)
def load_library() -> list[ExerciseSeed]:
    with LIBRARY_PATH.open("r", encoding="utf-8") as f:
        raw = json.load(f)
    return TypeAdapter(list[ExerciseSeed]).validate_python(raw)

def _to_exercise(entry: ExerciseSeed) -> Exercise:
    known_muscles = {m.value for m in MuscleGroup}
    try:
        category = ExerciseCategory(entry.category)
    except ValueError:
        category = ExerciseCategory.compound
    try:
        equipment = EquipmentType(entry.equipmentType)
    except ValueError:
        equipment = EquipmentType.barbell
    return Exercise(
        name=entry.name,
        category=category,
        muscle_groups=[m for m in entry.muscleGroups if m in known_muscles],
        equipment_type=equipment,
        notes=entry.notes,
        is_custom=False,
    )

def seed_exercise_library(db: Session) -> int:
    if ExerciseRepository(db).count() > 0:
        return 0
    entries = load_library()
    db.add_all(_to_exercise(e) for e in entries)
    db.commit()
    log.info("seeded exercise library count=%s", len(entries))
    return len(entries)

def seed_default_equipment(db: Session) -> int:
    repo = EquipmentRepository(db)
    if not repo.is_empty():
        return 0
    repo.create(Barbell, commit=False, **DEFAULT_BAR)
    for weight, count, color in DEFAULT_PLATES:
        repo.create(Plate, commit=False, weight=weight, unit=WeightUnit.lb, count=count, color=color)
    db.commit()
    log.info("seeded default equipment plates=%s", len(DEFAULT_PLATES))
    return 1 + len(DEFAULT_PLATES)

def seed_if_needed(db: Session) -> dict[str, int]:
    return {
        "exercises": seed_exercise_library(db),
        "equipment": seed_default_equipment(db),
    }
