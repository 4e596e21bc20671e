from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from liftlog.db import get_db
from liftlog.deps.workout import get_workout_service
from liftlog.repositories.session_repo import SessionRepository
from liftlog.schemas.session import SessionPage, WorkoutSessionRead, WorkoutSessionSummary
from liftlog.services.workout import WorkoutService

router = APIRouter(prefix="/sessions", tags=["sessions"])

@router.get("", response_model=SessionPage)
def list_sessions(
    db: Session = Depends(get_db),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    page = SessionRepository(db).list_completed(limit=limit, offset=offset)
    return SessionPage(
        items=[WorkoutSessionSummary.model_validate(s) for s in page.items],
        total=page.total,
        limit=page.limit,
        offset=page.offset,
    )

@router.get("/{session_id}", response_model=WorkoutSessionRead)
def get_session(session_id: int, db: Session = Depends(get_db)):
    sess = SessionRepository(db).get(session_id)
    if not sess:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
    return sess

@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_session(
    session_id: int,
    db: Session = Depends(get_db),
    service: WorkoutService = Depends(get_workout_service),
):
    active = service.active
    if active is not None and active.session is not None and active.session.id == session_id:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="session is in progress; discard it instead")
    if not SessionRepository(db).delete(session_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
