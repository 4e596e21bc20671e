from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from liftlog.db import get_db
from liftlog.repositories.exercise_repo import ExerciseRepository
from liftlog.schemas.stats import ExerciseProgress, WeeklyStat
from liftlog.services.stats import exercise_progress, weekly_stats

router = APIRouter(prefix="/stats", tags=["stats"])

@router.get("/weekly", response_model=list[WeeklyStat])
def get_weekly_stats(db: Session = Depends(get_db), weeks: int = Query(8, ge=1, le=52)):
    return weekly_stats(db, weeks=weeks)

@router.get("/exercises/{exercise_id}", response_model=ExerciseProgress)
def get_exercise_progress(exercise_id: int, db: Session = Depends(get_db)):
    ex = ExerciseRepository(db).get(exercise_id)
    if not ex:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exercise not found")
    return exercise_progress(db, exercise_id, ex.name)
