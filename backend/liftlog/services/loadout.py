# liftlog/services/loadout.py
from __future__ import annotations

from sqlalchemy.orm import Session

from liftlog.engine import PlateSpec, calculate
from liftlog.models.enums import WeightUnit
from liftlog.repositories.equipment_repo import EquipmentRepository
from liftlog.schemas.equipment import LoadedPlateRead, LoadoutRead
from liftlog.settings import get_settings

def _in_unit(value: float, unit: WeightUnit, target: WeightUnit) -> float:
    return round(WeightUnit(unit).convert(value, target), 2)

def resolve_bar_weight(db: Session, bar_weight: float | None = None,
                       unit: WeightUnit = WeightUnit.lb) -> float:
    """Explicit weight (already in ``unit``), else the default bar, else the configured bar."""
    if bar_weight is not None:
        return bar_weight
    bar = EquipmentRepository(db).default_barbell()
    if bar is not None:
        return _in_unit(bar.weight, bar.unit, unit)
    settings = get_settings()
    return _in_unit(settings.DEFAULT_BAR_WEIGHT, WeightUnit(settings.DEFAULT_UNIT), unit)

def loadout_for(db: Session, target_weight: float, bar_weight: float | None = None,
                unit: WeightUnit | None = None) -> LoadoutRead:
    """Plate the target with the stored inventory and the default bar."""
    unit = unit or WeightUnit(get_settings().DEFAULT_UNIT)
    bar = resolve_bar_weight(db, bar_weight, unit)
    plates = [
        PlateSpec(_in_unit(p.weight, p.unit, unit), p.count, p.color)
        for p in EquipmentRepository(db).list_plates()
    ]
    loadout = calculate(target_weight, bar, plates)
    return LoadoutRead(
        target_weight=target_weight,
        bar_weight=bar,
        unit=unit,
        plates_per_side=[LoadedPlateRead.model_validate(p) for p in loadout.plates_per_side],
        total_weight=loadout.total_weight,
        is_exact=loadout.is_exact,
        difference=loadout.difference,
        summary=loadout.summary(),
    )
