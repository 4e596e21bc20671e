# liftlog/services/workout.py
from __future__ import annotations
import logging
from typing import Callable, Optional

from sqlalchemy.orm import Session

from liftlog.db import SessionLocal
from liftlog.engine import (
    AsyncioScheduler,
    InvalidTransition,
    ProgressionResult,
    Scheduler,
    SessionState,
    SessionStatus,
    evaluate_session,
    utcnow,
)
from liftlog.engine.progression import working_sets
from liftlog.engine.timer import Clock
from liftlog.models import WorkoutSession
from liftlog.models.enums import WeightUnit
from liftlog.repositories.routine_repo import RoutineRepository
from liftlog.services.store import SqlWorkoutStore
from liftlog.settings import get_settings

log = logging.getLogger(__name__)

class WorkoutService:
    """
    Holds the single live workout of the process.

    The SessionState keeps its own DB session for the whole workout so the ORM
    objects it mutates stay attached between requests.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session] = SessionLocal,
        scheduler: Optional[Scheduler] = None,
        clock: Clock = utcnow,
    ):
        self._session_factory = session_factory
        self.scheduler = scheduler or AsyncioScheduler()
        self.clock = clock
        self.state: Optional[SessionState] = None
        self._store: Optional[SqlWorkoutStore] = None

    @property
    def active(self) -> Optional[SessionState]:
        if self.state is not None and self.state.status == SessionStatus.active:
            return self.state
        return None

    def require_active(self) -> SessionState:
        state = self.active
        if state is None:
            raise InvalidTransition("no active workout")
        return state

    def start(self, routine_id: int) -> SessionState:
        if self.active is not None:
            raise InvalidTransition("a workout is already active")
        db = self._session_factory()
        routine = RoutineRepository(db).get(routine_id)
        if routine is None:
            db.close()
            raise LookupError("routine_not_found")
        store = SqlWorkoutStore(db)
        state = SessionState(
            store,
            self.scheduler,
            clock=self.clock,
            default_unit=WeightUnit(get_settings().DEFAULT_UNIT),
        )
        try:
            state.start(routine)
        except Exception:
            db.rollback()
            db.close()
            raise
        self._release()
        self.state, self._store = state, store
        return state

    def finish(self) -> tuple[WorkoutSession, list[ProgressionResult]]:
        """
        End the live workout and apply progression.

        The finished session is committed before progression runs. If progression
        fails its writes are rolled back and the error propagates; the live state
        is released either way.
        """
        state = self.require_active()
        try:
            session = state.finish()
            results: list[ProgressionResult] = []
            for re, result in evaluate_session(state):
                if working_sets(state.set_logs_for(re)):
                    re.next_target_weight = result.new_weight
                results.append(result)
            state.store.save()
            log.info("progression evaluated session=%s exercises=%s", session.id, len(results))
            for set_log in session.set_logs:
                # load while attached; the session outlives its DB session
                set_log.exercise
        except Exception:
            log.exception("finishing workout failed")
            self._store.rollback()
            raise
        finally:
            self._release()
        return session, results

    def discard(self) -> None:
        state = self.require_active()
        try:
            state.discard()
        except Exception:
            self._store.rollback()
            raise
        finally:
            self._release()

    def _release(self) -> None:
        if self._store is not None:
            self._store.close()
        self.state, self._store = None, None
