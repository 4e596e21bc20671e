# liftlog/repositories/routine_repo.py
from __future__ import annotations
from typing import Any, Optional

from sqlalchemy import select

from liftlog.models import Routine, RoutineExercise, ProgressionRule
from liftlog.repositories.base import BaseRepository

RULE_FIELDS = (
    "increment_amount",
    "unit",
    "trigger_type",
    "consecutive_failures",
    "deload_percentage",
    "deload_after_failures",
)

class RoutineRepository(BaseRepository[Routine]):
    model = Routine

    def list(self, *, is_template: bool | None = None) -> list[Routine]:
        stmt = select(Routine).order_by(Routine.created_at.desc(), Routine.id.desc())
        if is_template is not None:
            stmt = stmt.where(Routine.is_template == is_template)
        return list(self.db.execute(stmt).scalars().all())

    def create(self, *, name: str, is_template: bool = False, source: str | None = None,
               commit: bool = True) -> Routine:
        routine = Routine(name=name, is_template=is_template, source=source)
        if not commit:
            self.db.add(routine)
            return routine
        return self.add_and_refresh(routine)

    def get_exercise(self, routine_id: int, routine_exercise_id: int) -> Optional[RoutineExercise]:
        re = self.db.get(RoutineExercise, routine_exercise_id)
        if re is None or re.routine_id != routine_id:
            return None
        return re

    def add_exercise(
        self,
        routine: Routine,
        *,
        exercise_id: int | None,
        order: int | None = None,
        target_sets: int = 3,
        target_rep_min: int = 5,
        target_rep_max: int = 5,
        target_rpe: float | None = None,
        rest_seconds: int = 90,
        rule: dict[str, Any] | None = None,
        commit: bool = True,
    ) -> RoutineExercise:
        if order is None:
            order = max((re.order for re in routine.exercises), default=-1) + 1
        re = RoutineExercise(
            exercise_id=exercise_id,
            order=order,
            target_sets=target_sets,
            target_rep_min=target_rep_min,
            target_rep_max=target_rep_max,
            target_rpe=target_rpe,
            rest_seconds=rest_seconds,
        )
        if rule is not None:
            re.progression_rule = ProgressionRule(**{k: v for k, v in rule.items() if k in RULE_FIELDS})
        routine.exercises.append(re)
        if commit:
            self.db.commit()
            self.db.refresh(re)
        return re

    def update_exercise(self, re: RoutineExercise, *, rule: dict[str, Any] | None = None,
                        remove_rule: bool = False, **fields: Any) -> RoutineExercise:
        for key, value in fields.items():
            setattr(re, key, value)
        if remove_rule:
            re.progression_rule = None
        elif rule is not None:
            if re.progression_rule is None:
                re.progression_rule = ProgressionRule()
            for key, value in rule.items():
                if key in RULE_FIELDS:
                    setattr(re.progression_rule, key, value)
        self.db.commit()
        self.db.refresh(re)
        return re

    def remove_exercise(self, re: RoutineExercise) -> None:
        self.db.delete(re)
        self.db.commit()
