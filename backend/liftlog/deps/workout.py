from contextlib import contextmanager
from functools import lru_cache

from fastapi import HTTPException, status

from liftlog.engine import InvalidTransition
from liftlog.services.workout import WorkoutService

@lru_cache
def get_workout_service() -> WorkoutService:
    # one live workout per process; tests override this dependency
    return WorkoutService()

@contextmanager
def engine_errors():
    """Map engine errors raised inside the block to HTTP errors."""
    try:
        yield
    except InvalidTransition as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except LookupError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
