# liftlog/repositories/equipment_repo.py
from __future__ import annotations
from typing import Any, Optional

from sqlalchemy import select, func, update

from liftlog.db import Base
from liftlog.models import Barbell, Plate

class EquipmentRepository:
    def __init__(self, db):
        self.db = db

    def list(self, model: type[Base]) -> list[Any]:
        stmt = select(model).order_by(model.id.asc())
        return list(self.db.execute(stmt).scalars().all())

    def list_plates(self) -> list[Plate]:
        stmt = select(Plate).order_by(Plate.weight.desc())
        return list(self.db.execute(stmt).scalars().all())

    def default_barbell(self) -> Optional[Barbell]:
        stmt = select(Barbell).order_by(Barbell.is_default.desc(), Barbell.id.asc()).limit(1)
        return self.db.execute(stmt).scalar_one_or_none()

    def is_empty(self) -> bool:
        bars = self.db.execute(select(func.count()).select_from(Barbell)).scalar_one()
        plates = self.db.execute(select(func.count()).select_from(Plate)).scalar_one()
        return bars == 0 and plates == 0

    def create(self, model: type[Base], *, commit: bool = True, **fields: Any) -> Any:
        if model is Barbell and fields.get("is_default"):
            # only one default bar
            self.db.execute(update(Barbell).values(is_default=False))
        entity = model(**fields)
        self.db.add(entity)
        if commit:
            self.db.commit()
            self.db.refresh(entity)
        return entity

    def delete(self, model: type[Base], entity_id: int) -> bool:
        entity = self.db.get(model, entity_id)
        if entity is None:
            return False
        self.db.delete(entity)
        self.db.commit()
        return True
