# liftlog/services/stats.py
from __future__ import annotations
from datetime import date, datetime, timedelta, timezone
from itertools import groupby

from sqlalchemy.orm import Session

from liftlog.models import SetLog, WorkoutSession
from liftlog.repositories.session_repo import SessionRepository
from liftlog.schemas.stats import ExerciseProgress, ExerciseProgressPoint, WeeklyStat

def _naive_utc(dt: datetime) -> datetime:
    # sqlite hands back naive datetimes; compare everything as naive UTC
    if dt.tzinfo is not None:
        return dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt

def week_start(day: date) -> date:
    return day - timedelta(days=day.weekday())

def _working(session: WorkoutSession) -> list[SetLog]:
    return [s for s in session.set_logs if s.is_completed and not s.is_warmup]

def weekly_stats(db: Session, *, weeks: int = 8, now: datetime | None = None) -> list[WeeklyStat]:
    """Completed workouts, working sets and volume per Monday-based week, oldest first."""
    today = _naive_utc(now or datetime.now(timezone.utc)).date()
    first = week_start(today) - timedelta(weeks=weeks - 1)
    since = datetime.combine(first, datetime.min.time())
    sessions = SessionRepository(db).list_completed_since(since)

    buckets: dict[date, list[WorkoutSession]] = {first + timedelta(weeks=i): [] for i in range(weeks)}
    for session in sessions:
        key = week_start(_naive_utc(session.start_time).date())
        if key in buckets:
            buckets[key].append(session)

    stats = []
    for start, items in buckets.items():
        sets = [s for session in items for s in _working(session)]
        stats.append(WeeklyStat(
            week_start=start,
            label=f"{start.month}/{start.day}",
            workouts=len(items),
            sets=len(sets),
            volume=sum(s.actual_weight * s.actual_reps for s in sets),
        ))
    return stats

def exercise_progress(db: Session, exercise_id: int, exercise_name: str | None = None) -> ExerciseProgress:
    """Per-session best weight, volume and reps of one exercise across completed workouts."""
    sets = SessionRepository(db).completed_sets_for_exercise(exercise_id)
    points = []
    # rows arrive ordered by session start, so each session is one contiguous run
    for session_id, group in groupby(sets, key=lambda s: s.session_id):
        group = list(group)
        points.append(ExerciseProgressPoint(
            session_id=session_id,
            date=_naive_utc(group[0].session.start_time).date(),
            max_weight=max(s.actual_weight for s in group),
            volume=sum(s.actual_weight * s.actual_reps for s in group),
            max_reps=max(s.actual_reps for s in group),
        ))
    progress = ExerciseProgress(exercise_id=exercise_id, exercise_name=exercise_name, points=points)
    if points:
        first, last = points[0].max_weight, points[-1].max_weight
        progress.starting_weight = first
        progress.current_weight = last
        progress.change_percent = round((last - first) / first * 100, 1) if first > 0 else 0.0
    return progress
