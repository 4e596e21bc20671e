# liftlog/engine/progression.py
from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from typing import Sequence

from liftlog.engine.loadout import format_weight
from liftlog.models import Exercise, ProgressionRule, RoutineExercise, SetLog
from liftlog.models.enums import ProgressionTrigger, WeightUnit

log = logging.getLogger(__name__)

UNKNOWN_EXERCISE = "Unknown exercise"

@dataclass(slots=True, frozen=True)
class ProgressionResult:
    exercise_name: str
    previous_weight: float
    new_weight: float
    passed: bool
    deloaded: bool
    message: str

def working_sets(set_logs: Sequence[SetLog]) -> list[SetLog]:
    return [s for s in set_logs if not s.is_warmup and s.is_completed]

def round_down_to_increment(value: float, increment: float) -> float:
    if increment <= 0:
        return value
    return math.floor(value / increment) * increment

def _unit_label(rule: ProgressionRule) -> str:
    unit = rule.unit
    return unit.value if isinstance(unit, WeightUnit) else str(unit)

def _passed(rule: ProgressionRule, sets: list[SetLog], routine_exercise: RoutineExercise) -> bool:
    rep_min = routine_exercise.target_rep_min
    if ProgressionTrigger(rule.trigger_type) == ProgressionTrigger.top_set_hit:
        # max() keeps the first of equal keys
        top = max(sets, key=lambda s: s.actual_weight)
        return top.actual_reps >= rep_min
    at_target = sum(1 for s in sets if s.actual_reps >= rep_min)
    return at_target >= routine_exercise.target_sets

def evaluate(
    exercise: Exercise | None,
    set_logs: Sequence[SetLog],
    progression_rule: ProgressionRule,
    routine_exercise: RoutineExercise,
) -> ProgressionResult:
    """
    Decide the next prescribed weight for one exercise of a finished session.

    ``set_logs`` are expected sorted by set number. The only side effect is on
    ``progression_rule.consecutive_failures``.
    """
    name = exercise.name if exercise is not None else UNKNOWN_EXERCISE
    sets = working_sets(set_logs)
    if not sets:
        return ProgressionResult(
            exercise_name=name,
            previous_weight=0.0,
            new_weight=0.0,
            passed=False,
            deloaded=False,
            message="No working sets completed",
        )

    rule = progression_rule
    unit = _unit_label(rule)
    current = sets[0].target_weight

    if _passed(rule, sets, routine_exercise):
        new_weight = current + rule.increment_amount
        rule.consecutive_failures = 0
        log.info("progression pass exercise=%s %s -> %s", name, current, new_weight)
        return ProgressionResult(
            exercise_name=name,
            previous_weight=current,
            new_weight=new_weight,
            passed=True,
            deloaded=False,
            message=f"Increase weight to {format_weight(new_weight)} {unit}",
        )

    rule.consecutive_failures = (rule.consecutive_failures or 0) + 1

    if rule.consecutive_failures >= rule.deload_after_failures:
        deload_amount = current * rule.deload_percentage
        new_weight = round_down_to_increment(current - deload_amount, rule.increment_amount)
        rule.consecutive_failures = 0
        log.info("progression deload exercise=%s %s -> %s", name, current, new_weight)
        return ProgressionResult(
            exercise_name=name,
            previous_weight=current,
            new_weight=new_weight,
            passed=False,
            deloaded=True,
            message=(
                f"Deload to {format_weight(new_weight)} {unit} "
                f"after {rule.deload_after_failures} consecutive failures"
            ),
        )

    log.info("progression repeat exercise=%s weight=%s failures=%s/%s",
             name, current, rule.consecutive_failures, rule.deload_after_failures)
    return ProgressionResult(
        exercise_name=name,
        previous_weight=current,
        new_weight=current,
        passed=False,
        deloaded=False,
        message=(
            f"Repeat {format_weight(current)} {unit} "
            f"(failure {rule.consecutive_failures}/{rule.deload_after_failures})"
        ),
    )
