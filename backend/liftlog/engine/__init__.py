from .loadout import Loadout, LoadedPlate, PlateSpec, calculate, format_weight
from .progression import ProgressionResult, evaluate, round_down_to_increment
from .timer import AsyncioScheduler, ManualScheduler, RestTimer, Scheduler, utcnow
from .session_state import (
    InvalidTransition,
    SessionState,
    SessionStatus,
    WorkoutStore,
    evaluate_session,
)

__all__ = [
    "Loadout",
    "LoadedPlate",
    "PlateSpec",
    "calculate",
    "format_weight",
    "ProgressionResult",
    "evaluate",
    "round_down_to_increment",
    "AsyncioScheduler",
    "ManualScheduler",
    "RestTimer",
    "Scheduler",
    "utcnow",
    "InvalidTransition",
    "SessionState",
    "SessionStatus",
    "WorkoutStore",
    "evaluate_session",
]
