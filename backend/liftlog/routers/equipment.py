from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from liftlog.db import get_db
from liftlog.models import Barbell, Plate, DumbbellSet, Machine, CableAttachment
from liftlog.models.enums import WeightUnit
from liftlog.repositories.equipment_repo import EquipmentRepository
from liftlog.schemas.equipment import (
    BarbellCreate, BarbellRead,
    PlateCreate, PlateRead,
    DumbbellSetCreate, DumbbellSetRead,
    MachineCreate, MachineRead,
    CableAttachmentCreate, CableAttachmentRead,
    LoadoutRead,
)
from liftlog.services.loadout import loadout_for

router = APIRouter(prefix="/equipment", tags=["equipment"])

@router.get("/loadout", response_model=LoadoutRead)
def plate_loadout(
    target_weight: float = Query(..., ge=0, le=2000),
    bar_weight: float | None = Query(None, gt=0, le=2000),
    unit: WeightUnit | None = Query(None),
    db: Session = Depends(get_db),
):
    return loadout_for(db, target_weight, bar_weight, unit)

def _register(path: str, model, create_schema, read_schema, label: str):
    """list/create/delete routes for one equipment kind."""

    def list_items(db: Session = Depends(get_db)):
        repo = EquipmentRepository(db)
        return repo.list_plates() if model is Plate else repo.list(model)

    def create_item(payload: create_schema, db: Session = Depends(get_db)):
        return EquipmentRepository(db).create(model, **payload.model_dump())

    def delete_item(item_id: int, db: Session = Depends(get_db)):
        if not EquipmentRepository(db).delete(model, item_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{label} not found")

    router.add_api_route(f"/{path}", list_items, methods=["GET"], response_model=list[read_schema],
                         name=f"list_{path}")
    router.add_api_route(f"/{path}", create_item, methods=["POST"], response_model=read_schema,
                         status_code=status.HTTP_201_CREATED, name=f"create_{path}")
    router.add_api_route(f"/{path}/{{item_id}}", delete_item, methods=["DELETE"],
                         status_code=status.HTTP_204_NO_CONTENT, name=f"delete_{path}")

_register("barbells", Barbell, BarbellCreate, BarbellRead, "Barbell")
_register("plates", Plate, PlateCreate, PlateRead, "Plate")
_register("dumbbells", DumbbellSet, DumbbellSetCreate, DumbbellSetRead, "Dumbbell set")
_register("machines", Machine, MachineCreate, MachineRead, "Machine")
_register("cables", CableAttachment, CableAttachmentCreate, CableAttachmentRead, "Cable attachment")
