# liftlog/services/transfer.py
from __future__ import annotations
import logging

from sqlalchemy.orm import Session

from liftlog.models import Routine
from liftlog.models.enums import WeightUnit
from liftlog.repositories.exercise_repo import ExerciseRepository
from liftlog.repositories.routine_repo import RoutineRepository
from liftlog.schemas.transfer import ExportableExercise, ExportableRoutine

log = logging.getLogger(__name__)

UNKNOWN_NAME = "Unknown"

def export_routine(routine: Routine) -> ExportableRoutine:
    return ExportableRoutine(
        name=routine.name,
        source=routine.source,
        exercises=[
            ExportableExercise(
                exercise_name=re.exercise_name or UNKNOWN_NAME,
                order=re.order,
                target_sets=re.target_sets,
                target_rep_min=re.target_rep_min,
                target_rep_max=re.target_rep_max,
                target_rpe=re.target_rpe,
                rest_seconds=re.rest_seconds,
                increment_amount=re.progression_rule.increment_amount if re.progression_rule else None,
                increment_unit=re.progression_rule.unit.value if re.progression_rule else None,
            )
            for re in routine.sorted_exercises()
        ],
    )

def import_routine(db: Session, payload: ExportableRoutine) -> Routine:
    """
    Create a routine from an exported document.

    Exercise names are matched case-insensitively against the library; unknown
    names become custom exercises so no entry is dropped.
    """
    exercises = ExerciseRepository(db)
    routines = RoutineRepository(db)
    routine = routines.create(name=payload.name, source=payload.source or "Imported", commit=False)
    created = 0
    for item in sorted(payload.exercises, key=lambda e: e.order):
        exercise = exercises.get_by_name(item.exercise_name)
        if exercise is None:
            exercise = exercises.create(name=item.exercise_name, is_custom=True, commit=False)
            created += 1
        rule = None
        if item.increment_amount is not None and item.increment_amount > 0:
            rule = {"increment_amount": item.increment_amount, "unit": _unit(item.increment_unit)}
        rep_min = min(item.target_rep_min, item.target_rep_max)
        rep_max = max(item.target_rep_min, item.target_rep_max)
        routines.add_exercise(
            routine,
            exercise_id=exercise.id,
            order=item.order,
            target_sets=item.target_sets,
            target_rep_min=rep_min,
            target_rep_max=rep_max,
            target_rpe=item.target_rpe,
            rest_seconds=item.rest_seconds,
            rule=rule,
            commit=False,
        )
    db.commit()
    db.refresh(routine)
    log.info("routine imported id=%s exercises=%s new_custom=%s",
             routine.id, len(payload.exercises), created)
    return routine

def _unit(raw: str | None) -> WeightUnit:
    try:
        return WeightUnit(raw) if raw else WeightUnit.lb
    except ValueError:
        return WeightUnit.lb
