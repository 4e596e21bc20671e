from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from liftlog.db import get_db
from liftlog.models.enums import ExerciseCategory, EquipmentType, MuscleGroup
from liftlog.repositories.exercise_repo import ExerciseRepository
from liftlog.schemas.exercise import ExerciseCreate, ExerciseRead

router = APIRouter(prefix="/exercises", tags=["exercises"])

@router.get("", response_model=list[ExerciseRead])
def list_exercises(
    db: Session = Depends(get_db),
    muscle: MuscleGroup | None = Query(None),
    equipment: EquipmentType | None = Query(None),
    category: ExerciseCategory | None = Query(None),
):
    return ExerciseRepository(db).list(
        muscle=muscle.value if muscle else None, equipment=equipment, category=category
    )

@router.post("", response_model=ExerciseRead, status_code=status.HTTP_201_CREATED)
def create_exercise(payload: ExerciseCreate, db: Session = Depends(get_db)):
    repo = ExerciseRepository(db)
    if repo.get_by_name(payload.name):
        raise HTTPException(status_code=400, detail="exercise already exists")
    try:
        ex = repo.create(
            name=payload.name,
            category=payload.category,
            muscle_groups=[m.value for m in payload.muscle_groups],
            equipment_type=payload.equipment_type,
            notes=payload.notes,
            is_custom=True,
        )
    except ValueError as e:
        if str(e) == "exercise_name_exists":
            raise HTTPException(status_code=400, detail="exercise already exists")
        raise
    return ex

@router.get("/{exercise_id}", response_model=ExerciseRead)
def get_exercise(exercise_id: int, db: Session = Depends(get_db)):
    ex = ExerciseRepository(db).get(exercise_id)
    if not ex:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exercise not found")
    return ex

@router.delete("/{exercise_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_exercise(exercise_id: int, db: Session = Depends(get_db)):
    # routine entries and past sets keep their slot with the reference cleared
    if not ExerciseRepository(db).delete(exercise_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exercise not found")
