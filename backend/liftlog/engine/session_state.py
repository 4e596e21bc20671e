# liftlog/engine/session_state.py
from __future__ import annotations
import logging
from enum import Enum
from typing import Any, Callable, Optional, Protocol

from liftlog.engine.progression import ProgressionResult, evaluate
from liftlog.engine.timer import Clock, RestTimer, Scheduler, utcnow
from liftlog.models import Exercise, Routine, RoutineExercise, SetLog, WorkoutSession
from liftlog.models.enums import WeightUnit

log = logging.getLogger(__name__)

class SessionStatus(str, Enum):
    idle = "idle"
    active = "active"
    finished = "finished"
    discarded = "discarded"

class InvalidTransition(RuntimeError):
    """Operation called in a state that does not allow it (a caller bug)."""

class WorkoutStore(Protocol):
    def add_session(self, session: WorkoutSession) -> None: ...
    def delete_session(self, session: WorkoutSession) -> None: ...
    def get_exercise(self, exercise_id: int | None) -> Exercise | None: ...
    def reload_routine_exercise(self, routine_exercise: RoutineExercise) -> RoutineExercise | None: ...
    def save(self) -> None: ...

Listener = Callable[["SessionState"], None]

class SessionState:
    """
    Owns one workout from start to finish/discard.

    Single owner, single thread: every public method and every timer tick must
    run on the same thread (the event loop in the API).
    """

    def __init__(
        self,
        store: WorkoutStore,
        scheduler: Scheduler,
        clock: Clock = utcnow,
        default_unit: WeightUnit = WeightUnit.lb,
    ):
        self.store = store
        self.clock = clock
        self.default_unit = default_unit
        self.status = SessionStatus.idle
        self.session: Optional[WorkoutSession] = None
        self.routine: Optional[Routine] = None
        self.current_exercise_index = 0
        self.version = 0
        self._routine_exercises: list[RoutineExercise] = []
        self._listeners: list[Listener] = []
        self.timer = RestTimer(scheduler, on_change=self._changed)

    # ---- lifecycle

    def start(self, routine: Routine) -> WorkoutSession:
        self._require(SessionStatus.idle, "start")
        now = self.clock()
        session = WorkoutSession(
            routine_id=routine.id,
            start_time=now,
            end_time=None,
            notes="",
            is_completed=False,
        )
        self._routine_exercises = routine.sorted_exercises()
        for re in self._routine_exercises:
            if re.exercise_id is None:
                # exercise was deleted: keeps its slot, gets no sets
                continue
            unit = re.progression_rule.unit if re.progression_rule is not None else self.default_unit
            for number in range(1, re.target_sets + 1):
                session.set_logs.append(SetLog(
                    exercise_id=re.exercise_id,
                    set_number=number,
                    target_weight=0.0,
                    actual_weight=0.0,
                    target_reps=re.target_rep_min,
                    actual_reps=0,
                    unit=unit,
                    is_warmup=False,
                    rpe=None,
                    is_completed=False,
                    timestamp=now,
                ))
        self.store.add_session(session)
        self.store.save()
        self.session = session
        self.routine = routine
        self.current_exercise_index = 0
        self.status = SessionStatus.active
        log.info("workout started routine=%s exercises=%s sets=%s",
                 routine.id, len(self._routine_exercises), len(session.set_logs))
        self._changed()
        return session

    def finish(self) -> WorkoutSession:
        self._require(SessionStatus.active, "finish")
        self.timer.stop()
        session = self.session
        session.end_time = self.clock()
        session.is_completed = True
        self.store.save()
        self.status = SessionStatus.finished
        log.info("workout finished session=%s completed_sets=%s/%s",
                 session.id, self.completed_sets, self.total_sets)
        self._changed()
        return session

    def discard(self) -> None:
        self._require(SessionStatus.active, "discard")
        self.timer.stop()
        log.info("workout discarded session=%s", self.session.id)
        self.store.delete_session(self.session)
        self.store.save()
        self.session = None
        self.status = SessionStatus.discarded
        self._changed()

    # ---- sets

    def complete_set(self, set_log: SetLog, actual_reps: int, actual_weight: float,
                     rpe: float | None = None) -> None:
        self._require(SessionStatus.active, "complete_set")
        self._require_owned(set_log)
        set_log.actual_reps = actual_reps
        set_log.actual_weight = actual_weight
        if rpe is not None:
            set_log.rpe = rpe
        set_log.is_completed = True
        set_log.timestamp = self.clock()
        owner = self._owning_routine_exercise(set_log)
        if owner is not None and owner.rest_seconds > 0:
            self.timer.start(owner.rest_seconds)
        self.store.save()
        self._changed()

    def uncomplete_set(self, set_log: SetLog) -> None:
        self._require(SessionStatus.active, "uncomplete_set")
        self._require_owned(set_log)
        set_log.is_completed = False
        set_log.actual_reps = 0
        self.store.save()
        self._changed()

    def adjust_weight(self, set_log: SetLog, delta: float) -> None:
        self._require(SessionStatus.active, "adjust_weight")
        self._require_owned(set_log)
        set_log.target_weight = max(0.0, set_log.target_weight + delta)
        if not set_log.is_completed:
            set_log.actual_weight = set_log.target_weight
        self.store.save()
        self._changed()

    def set_weight_for_all(self, weight: float) -> None:
        self._require(SessionStatus.active, "set_weight_for_all")
        for set_log in self.current_set_logs:
            if set_log.is_warmup:
                continue
            set_log.target_weight = weight
            if not set_log.is_completed:
                set_log.actual_weight = weight
        self.store.save()
        self._changed()

    def toggle_warmup(self, set_log: SetLog) -> None:
        self._require(SessionStatus.active, "toggle_warmup")
        self._require_owned(set_log)
        set_log.is_warmup = not set_log.is_warmup
        self.store.save()
        self._changed()

    # ---- navigation

    def next_exercise(self) -> None:
        self.go_to(self.current_exercise_index + 1)

    def previous_exercise(self) -> None:
        self.go_to(self.current_exercise_index - 1)

    def go_to(self, index: int) -> None:
        self._require(SessionStatus.active, "navigate")
        if not 0 <= index < self.exercise_count:
            return
        self.current_exercise_index = index
        self.timer.stop()
        self._changed()

    # ---- rest timer

    def skip_rest(self) -> None:
        self._require(SessionStatus.active, "skip_rest")
        self.timer.stop()

    def extend_rest(self, delta_seconds: int) -> None:
        self._require(SessionStatus.active, "extend_rest")
        self.timer.extend(delta_seconds)

    @property
    def rest_remaining(self) -> int:
        return self.timer.remaining

    @property
    def is_resting(self) -> bool:
        return self.timer.is_running

    # ---- derived views

    @property
    def routine_exercises(self) -> list[RoutineExercise]:
        return list(self._routine_exercises)

    @property
    def exercise_count(self) -> int:
        return len(self._routine_exercises)

    @property
    def current_routine_exercise(self) -> Optional[RoutineExercise]:
        if 0 <= self.current_exercise_index < self.exercise_count:
            return self._routine_exercises[self.current_exercise_index]
        return None

    def set_logs_for(self, routine_exercise: Optional[RoutineExercise]) -> list[SetLog]:
        if self.session is None or routine_exercise is None or routine_exercise.exercise_id is None:
            return []
        return sorted(
            (s for s in self.session.set_logs if s.exercise_id == routine_exercise.exercise_id),
            key=lambda s: s.set_number,
        )

    @property
    def current_set_logs(self) -> list[SetLog]:
        return self.set_logs_for(self.current_routine_exercise)

    @property
    def total_sets(self) -> int:
        return len(self.session.set_logs) if self.session is not None else 0

    @property
    def completed_sets(self) -> int:
        if self.session is None:
            return 0
        return sum(1 for s in self.session.set_logs if s.is_completed)

    def find_set_log(self, set_log_id: int) -> Optional[SetLog]:
        if self.session is None:
            return None
        return next((s for s in self.session.set_logs if s.id == set_log_id), None)

    def snapshot(self) -> dict[str, Any]:
        current = self.current_routine_exercise
        exercise = self.store.get_exercise(current.exercise_id) if current is not None else None
        return {
            "version": self.version,
            "status": self.status.value,
            "session_id": self.session.id if self.session is not None else None,
            "routine_id": self.routine.id if self.routine is not None else None,
            "routine_name": self.routine.name if self.routine is not None else None,
            "current_exercise_index": self.current_exercise_index,
            "exercise_count": self.exercise_count,
            "current_routine_exercise_id": current.id if current is not None else None,
            "current_exercise_name": exercise.name if exercise is not None else None,
            "rest_seconds": current.rest_seconds if current is not None else None,
            "current_set_logs": self.current_set_logs,
            "total_sets": self.total_sets,
            "completed_sets": self.completed_sets,
            "rest_remaining": self.rest_remaining,
            "is_resting": self.is_resting,
        }

    # ---- change notification

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    def _changed(self) -> None:
        self.version += 1
        for listener in list(self._listeners):
            listener(self)

    # ---- helpers

    def _require(self, status: SessionStatus, operation: str) -> None:
        if self.status != status:
            raise InvalidTransition(f"cannot {operation} while {self.status.value}")

    def _require_owned(self, set_log: SetLog) -> None:
        if not any(s is set_log for s in self.session.set_logs):
            raise InvalidTransition("set log does not belong to the active session")

    def _owning_routine_exercise(self, set_log: SetLog) -> Optional[RoutineExercise]:
        for re in self._routine_exercises:
            if re.exercise_id is not None and re.exercise_id == set_log.exercise_id:
                return re
        return self.current_routine_exercise

def evaluate_session(state: SessionState) -> list[tuple[RoutineExercise, ProgressionResult]]:
    """
    Run progression once per exercise of a finished session.

    Each routine exercise is re-read from the store first so edits made during the
    workout apply. Routine exercises that were removed, have no rule, or whose
    exercise was deleted are skipped.
    """
    if state.status != SessionStatus.finished:
        raise InvalidTransition(f"cannot evaluate progression while {state.status.value}")
    results: list[tuple[RoutineExercise, ProgressionResult]] = []
    seen: set[int] = set()
    for slot in state.routine_exercises:
        re = state.store.reload_routine_exercise(slot)
        if re is None:
            log.info("routine exercise %s removed during workout, skipping", slot.id)
            continue
        rule = re.progression_rule
        if rule is None or re.exercise_id is None or re.exercise_id in seen:
            continue
        seen.add(re.exercise_id)
        exercise = state.store.get_exercise(re.exercise_id)
        result = evaluate(exercise, state.set_logs_for(re), rule, re)
        results.append((re, result))
    state.store.save()
    return results
