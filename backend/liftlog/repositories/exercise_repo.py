# liftlog/repositories/exercise_repo.py
from __future__ import annotations
from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError

from liftlog.models import Exercise
from liftlog.models.enums import ExerciseCategory, EquipmentType
from liftlog.repositories.base import BaseRepository

class ExerciseRepository(BaseRepository[Exercise]):
    model = Exercise

    # READS
    def get_by_name(self, name: str) -> Optional[Exercise]:
        stmt = select(Exercise).where(func.lower(Exercise.name) == name.strip().lower())
        return self.db.execute(stmt).scalar_one_or_none()

    def list(
        self,
        *,
        muscle: str | None = None,
        equipment: EquipmentType | None = None,
        category: ExerciseCategory | None = None,
    ) -> list[Exercise]:
        stmt = select(Exercise).order_by(Exercise.name.asc())
        if equipment is not None:
            stmt = stmt.where(Exercise.equipment_type == equipment)
        if category is not None:
            stmt = stmt.where(Exercise.category == category)
        items = list(self.db.execute(stmt).scalars().all())
        if muscle:
            # JSON list column: filter in Python to stay portable across sqlite/postgres
            items = [ex for ex in items if muscle in (ex.muscle_groups or [])]
        return items

    def count(self) -> int:
        return self.db.execute(select(func.count()).select_from(Exercise)).scalar_one()

    # WRITES
    def create(
        self,
        *,
        name: str,
        category: ExerciseCategory = ExerciseCategory.compound,
        muscle_groups: list[str] | None = None,
        equipment_type: EquipmentType = EquipmentType.other,
        notes: str = "",
        is_custom: bool = True,
        commit: bool = True,
    ) -> Exercise:
        ex = Exercise(
            name=name,
            category=category,
            muscle_groups=list(muscle_groups or []),
            equipment_type=equipment_type,
            notes=notes,
            is_custom=is_custom,
        )
        if not commit:
            # flush so the id is usable and later name lookups see it
            self.db.add(ex)
            self.db.flush()
            return ex
        try:
            return self.add_and_refresh(ex)
        except IntegrityError:
            self.db.rollback()
            raise ValueError("exercise_name_exists")
