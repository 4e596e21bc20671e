"""
Point the app at a throwaway SQLite file and swap the workout service for one
driven by a ManualScheduler. Runs before any test module imports liftlog.
"""
import os
import tempfile

import pytest

_db_dir = tempfile.mkdtemp(prefix="liftlog-tests-")
os.environ["DB_URL"] = f"sqlite:///{os.path.join(_db_dir, 'liftlog.db')}"

from liftlog.db import Base, SessionLocal, engine  # noqa: E402
from liftlog import models  # noqa: E402,F401
from liftlog.deps.workout import get_workout_service  # noqa: E402
from liftlog.engine import ManualScheduler  # noqa: E402
from liftlog.main import app  # noqa: E402
from liftlog.services.seed import seed_if_needed  # noqa: E402
from liftlog.services.workout import WorkoutService  # noqa: E402

Base.metadata.create_all(engine)
with SessionLocal() as _db:
    seed_if_needed(_db)

scheduler = ManualScheduler()
workout_service = WorkoutService(scheduler=scheduler, clock=scheduler.now)
app.dependency_overrides[get_workout_service] = lambda: workout_service

@pytest.fixture(autouse=True)
def _no_live_workout():
    # a workout left open by a failing test must not leak into the next one
    yield
    if workout_service.active is not None:
        workout_service.discard()
