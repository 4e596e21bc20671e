# Routes that touch the live SessionState are async so they run on the
# event loop that also fires the rest timer ticks.
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session
from liftlog.db import get_db
from liftlog.deps.workout import engine_errors, get_workout_service
from liftlog.engine import SessionState
from liftlog.models import SetLog
from liftlog.schemas.equipment import LoadoutRead
from liftlog.schemas.progression import ProgressionResultRead
from liftlog.schemas.session import (
    CompleteSet,
    ExtendRest,
    FinishResponse,
    SetLogRead,
    StartWorkout,
    WeightDelta,
    WeightValue,
    WorkoutSessionRead,
    WorkoutStateRead,
)
from liftlog.services.loadout import loadout_for
from liftlog.services.workout import WorkoutService
from liftlog.settings import get_settings

router = APIRouter(prefix="/workout", tags=["workout"])

def state_read(state: SessionState | None) -> WorkoutStateRead:
    if state is None:
        return WorkoutStateRead(version=0, status="idle")
    data = state.snapshot()
    data["current_set_logs"] = [SetLogRead.model_validate(s) for s in data["current_set_logs"]]
    return WorkoutStateRead(**data)

def _set_log(state: SessionState, set_log_id: int) -> SetLog:
    set_log = state.find_set_log(set_log_id)
    if set_log is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Set not found")
    return set_log

@router.post("/start", response_model=WorkoutStateRead, status_code=status.HTTP_201_CREATED)
async def start_workout(payload: StartWorkout, service: WorkoutService = Depends(get_workout_service)):
    with engine_errors():
        state = service.start(payload.routine_id)
    return state_read(state)

@router.get("", response_model=WorkoutStateRead)
async def get_workout(service: WorkoutService = Depends(get_workout_service)):
    return state_read(service.active)

@router.post("/sets/{set_log_id}/complete", response_model=WorkoutStateRead)
async def complete_set(set_log_id: int, payload: CompleteSet,
                       service: WorkoutService = Depends(get_workout_service)):
    with engine_errors():
        state = service.require_active()
        state.complete_set(_set_log(state, set_log_id), payload.actual_reps, payload.actual_weight, payload.rpe)
    return state_read(state)

@router.post("/sets/{set_log_id}/uncomplete", response_model=WorkoutStateRead)
async def uncomplete_set(set_log_id: int, service: WorkoutService = Depends(get_workout_service)):
    with engine_errors():
        state = service.require_active()
        state.uncomplete_set(_set_log(state, set_log_id))
    return state_read(state)

@router.post("/sets/{set_log_id}/weight", response_model=WorkoutStateRead)
async def adjust_set_weight(set_log_id: int, payload: WeightDelta,
                            service: WorkoutService = Depends(get_workout_service)):
    with engine_errors():
        state = service.require_active()
        state.adjust_weight(_set_log(state, set_log_id), payload.delta)
    return state_read(state)

@router.post("/sets/{set_log_id}/warmup", response_model=WorkoutStateRead)
async def toggle_warmup(set_log_id: int, service: WorkoutService = Depends(get_workout_service)):
    with engine_errors():
        state = service.require_active()
        state.toggle_warmup(_set_log(state, set_log_id))
    return state_read(state)

@router.post("/weight", response_model=WorkoutStateRead)
async def set_weight_for_all(payload: WeightValue, service: WorkoutService = Depends(get_workout_service)):
    with engine_errors():
        state = service.require_active()
        state.set_weight_for_all(payload.weight)
    return state_read(state)

@router.post("/next", response_model=WorkoutStateRead)
async def next_exercise(service: WorkoutService = Depends(get_workout_service)):
    with engine_errors():
        state = service.require_active()
        state.next_exercise()
    return state_read(state)

@router.post("/previous", response_model=WorkoutStateRead)
async def previous_exercise(service: WorkoutService = Depends(get_workout_service)):
    with engine_errors():
        state = service.require_active()
        state.previous_exercise()
    return state_read(state)

@router.post("/goto/{index}", response_model=WorkoutStateRead)
async def go_to_exercise(index: int, service: WorkoutService = Depends(get_workout_service)):
    with engine_errors():
        state = service.require_active()
        state.go_to(index)
    return state_read(state)

@router.post("/rest/skip", response_model=WorkoutStateRead)
async def skip_rest(service: WorkoutService = Depends(get_workout_service)):
    with engine_errors():
        state = service.require_active()
        state.skip_rest()
    return state_read(state)

@router.post("/rest/extend", response_model=WorkoutStateRead)
async def extend_rest(payload: ExtendRest | None = None,
                      service: WorkoutService = Depends(get_workout_service)):
    seconds = payload.seconds if payload is not None else None
    if seconds is None:
        seconds = get_settings().REST_EXTEND_SECONDS
    with engine_errors():
        state = service.require_active()
        state.extend_rest(seconds)
    return state_read(state)

@router.post("/finish", response_model=FinishResponse)
async def finish_workout(service: WorkoutService = Depends(get_workout_service)):
    with engine_errors():
        session, results = service.finish()
    return FinishResponse(
        session=WorkoutSessionRead.model_validate(session),
        results=[ProgressionResultRead.model_validate(r) for r in results],
    )

@router.post("/discard", status_code=status.HTTP_204_NO_CONTENT)
async def discard_workout(service: WorkoutService = Depends(get_workout_service)):
    with engine_errors():
        service.discard()
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get("/loadout", response_model=LoadoutRead)
async def current_loadout(
    target_weight: float | None = Query(None, ge=0, le=2000),
    db: Session = Depends(get_db),
    service: WorkoutService = Depends(get_workout_service),
):
    """Plates for the current exercise's working weight (or an explicit target)."""
    with engine_errors():
        state = service.require_active()
    working = [s for s in state.current_set_logs if not s.is_warmup]
    if target_weight is None:
        target_weight = working[0].target_weight if working else 0.0
    # plates are counted in the unit the sets are logged in
    unit = working[0].unit if working else None
    return loadout_for(db, target_weight, unit=unit)
