# liftlog/services/store.py
from __future__ import annotations
from sqlalchemy import select
from sqlalchemy.orm import Session
from sqlalchemy.orm.attributes import set_committed_value

from liftlog.models import Exercise, ProgressionRule, RoutineExercise, WorkoutSession

class SqlWorkoutStore:
    """Persistence for a live workout, bound to one long-lived DB session."""

    def __init__(self, db: Session):
        self.db = db

    def add_session(self, session: WorkoutSession) -> None:
        self.db.add(session)
        # assign ids so set logs can be addressed before the first commit
        self.db.flush()

    def delete_session(self, session: WorkoutSession) -> None:
        self.db.delete(session)

    def get_exercise(self, exercise_id: int | None) -> Exercise | None:
        if exercise_id is None:
            return None
        return self.db.get(Exercise, exercise_id)

    def reload_routine_exercise(self, routine_exercise: RoutineExercise) -> RoutineExercise | None:
        """
        Re-read a routine exercise and its rule from the database.

        Other requests may edit or delete them while the workout runs; the copies
        held since start are stale. Returns None when the row is gone.
        """
        current = self.db.get(RoutineExercise, routine_exercise.id, populate_existing=True)
        if current is None:
            return None
        stmt = (
            select(ProgressionRule)
            .where(ProgressionRule.routine_exercise_id == current.id)
            .execution_options(populate_existing=True)
        )
        rule = self.db.execute(stmt).scalar_one_or_none()
        # no history: a rule removed elsewhere must not be deleted again here
        set_committed_value(current, "progression_rule", rule)
        return current

    def save(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()

    def close(self) -> None:
        self.db.close()
