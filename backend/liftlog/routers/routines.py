from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from liftlog.db import get_db
from liftlog.repositories.exercise_repo import ExerciseRepository
from liftlog.repositories.routine_repo import RoutineRepository
from liftlog.schemas.routine import (
    RoutineCreate,
    RoutineRead,
    RoutineExerciseCreate,
    RoutineExerciseRead,
    RoutineExerciseUpdate,
)
from liftlog.schemas.transfer import ExportableRoutine
from liftlog.services.transfer import export_routine, import_routine

router = APIRouter(prefix="/routines", tags=["routines"])

def _get_routine(repo: RoutineRepository, routine_id: int):
    routine = repo.get(routine_id)
    if not routine:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Routine not found")
    return routine

@router.get("", response_model=list[RoutineRead])
def list_routines(db: Session = Depends(get_db), is_template: bool | None = Query(None)):
    return RoutineRepository(db).list(is_template=is_template)

@router.post("", response_model=RoutineRead, status_code=status.HTTP_201_CREATED)
def create_routine(payload: RoutineCreate, db: Session = Depends(get_db)):
    return RoutineRepository(db).create(
        name=payload.name, is_template=payload.is_template, source=payload.source
    )

@router.post("/import", response_model=RoutineRead, status_code=status.HTTP_201_CREATED)
def import_routine_json(payload: ExportableRoutine, db: Session = Depends(get_db)):
    return import_routine(db, payload)

@router.get("/{routine_id}", response_model=RoutineRead)
def get_routine(routine_id: int, db: Session = Depends(get_db)):
    return _get_routine(RoutineRepository(db), routine_id)

@router.delete("/{routine_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_routine(routine_id: int, db: Session = Depends(get_db)):
    # past sessions keep their history with the routine reference cleared
    if not RoutineRepository(db).delete(routine_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Routine not found")

@router.get("/{routine_id}/export", response_model=ExportableRoutine)
def export_routine_json(routine_id: int, db: Session = Depends(get_db)):
    return export_routine(_get_routine(RoutineRepository(db), routine_id))

@router.post("/{routine_id}/exercises", response_model=RoutineExerciseRead,
             status_code=status.HTTP_201_CREATED)
def add_routine_exercise(routine_id: int, payload: RoutineExerciseCreate, db: Session = Depends(get_db)):
    repo = RoutineRepository(db)
    routine = _get_routine(repo, routine_id)
    if not ExerciseRepository(db).get(payload.exercise_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exercise not found")
    return repo.add_exercise(
        routine,
        exercise_id=payload.exercise_id,
        order=payload.order,
        target_sets=payload.target_sets,
        target_rep_min=payload.target_rep_min,
        target_rep_max=payload.target_rep_max,
        target_rpe=payload.target_rpe,
        rest_seconds=payload.rest_seconds,
        rule=payload.progression_rule.model_dump() if payload.progression_rule else None,
    )

@router.patch("/{routine_id}/exercises/{routine_exercise_id}", response_model=RoutineExerciseRead)
def update_routine_exercise(
    routine_id: int,
    routine_exercise_id: int,
    payload: RoutineExerciseUpdate,
    db: Session = Depends(get_db),
):
    repo = RoutineRepository(db)
    re = repo.get_exercise(routine_id, routine_exercise_id)
    if not re:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Routine exercise not found")
    fields = payload.model_dump(exclude_unset=True, exclude={"progression_rule", "remove_progression_rule"})
    rep_min = fields.get("target_rep_min", re.target_rep_min)
    rep_max = fields.get("target_rep_max", re.target_rep_max)
    if rep_min is None or rep_max is None or rep_min > rep_max:
        raise HTTPException(status_code=422, detail="target_rep_min must be <= target_rep_max")
    # explicit nulls only make sense for the optional RPE
    fields = {k: v for k, v in fields.items() if v is not None or k == "target_rpe"}
    return repo.update_exercise(
        re,
        rule=payload.progression_rule.model_dump() if payload.progression_rule else None,
        remove_rule=payload.remove_progression_rule,
        **fields,
    )

@router.delete("/{routine_id}/exercises/{routine_exercise_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_routine_exercise(routine_id: int, routine_exercise_id: int, db: Session = Depends(get_db)):
    repo = RoutineRepository(db)
    re = repo.get_exercise(routine_id, routine_exercise_id)
    if not re:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Routine exercise not found")
    repo.remove_exercise(re)
