# liftlog/repositories/session_repo.py
from __future__ import annotations
from datetime import datetime

from sqlalchemy import select

from liftlog.models import WorkoutSession, SetLog
from liftlog.repositories.base import BaseRepository, Page

class SessionRepository(BaseRepository[WorkoutSession]):
    model = WorkoutSession

    def list_completed(self, *, limit: int = 50, offset: int = 0) -> Page[WorkoutSession]:
        stmt = select(WorkoutSession).where(WorkoutSession.is_completed.is_(True))\
                                     .order_by(WorkoutSession.start_time.desc(), WorkoutSession.id.desc())
        return self.page_from_stmt(stmt, limit=limit, offset=offset)

    def list_completed_since(self, since: datetime) -> list[WorkoutSession]:
        stmt = select(WorkoutSession).where(WorkoutSession.is_completed.is_(True))\
                                     .where(WorkoutSession.start_time >= since)\
                                     .order_by(WorkoutSession.start_time.asc())
        return list(self.db.execute(stmt).scalars().all())

    def completed_sets_for_exercise(self, exercise_id: int) -> list[SetLog]:
        stmt = select(SetLog).join(WorkoutSession, SetLog.session_id == WorkoutSession.id)\
                             .where(SetLog.exercise_id == exercise_id)\
                             .where(WorkoutSession.is_completed.is_(True))\
                             .where(SetLog.is_completed.is_(True))\
                             .where(SetLog.is_warmup.is_(False))\
                             .order_by(WorkoutSession.start_time.asc(), SetLog.session_id.asc(), SetLog.set_number.asc())
        return list(self.db.execute(stmt).scalars().all())
