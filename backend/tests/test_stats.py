from datetime import datetime, timezone

from fastapi.testclient import TestClient
from liftlog.main import app
from liftlog.db import SessionLocal
from liftlog.models import Exercise, SetLog, WorkoutSession
from liftlog.models.enums import WeightUnit
from liftlog.services.stats import weekly_stats, week_start
import uuid

client = TestClient(app)

def _logged_session(db, exercise, start, sets):
    session = WorkoutSession(start_time=start, end_time=start, notes="", is_completed=True)
    for number, (weight, reps, warmup) in enumerate(sets, start=1):
        session.set_logs.append(SetLog(
            exercise_id=exercise.id, set_number=number, target_weight=weight,
            actual_weight=weight, target_reps=5, actual_reps=reps, unit=WeightUnit.lb,
            is_warmup=warmup, is_completed=True, timestamp=start,
        ))
    db.add(session)
    db.commit()
    return session

def test_weekly_buckets_monday_based():
    with SessionLocal() as db:
        ex = Exercise(name=f"Stats {uuid.uuid4().hex[:8]}")
        db.add(ex)
        db.commit()
        # Wednesday 2023-06-07 -> week of Monday 2023-06-05
        _logged_session(db, ex, datetime(2023, 6, 7, 18, 0, tzinfo=timezone.utc),
                        [(45, 10, True), (100, 5, False), (100, 5, False)])
        stats = weekly_stats(db, weeks=2, now=datetime(2023, 6, 14, 9, 0, tzinfo=timezone.utc))
    assert [s.label for s in stats] == ["6/5", "6/12"]
    assert stats[0].workouts == 1
    # warmups excluded
    assert stats[0].sets == 2
    assert stats[0].volume == 1000
    assert (stats[1].workouts, stats[1].sets, stats[1].volume) == (0, 0, 0)

def test_week_start():
    assert week_start(datetime(2024, 1, 7).date()).isoformat() == "2024-01-01"
    assert week_start(datetime(2024, 1, 8).date()).isoformat() == "2024-01-08"

def test_weekly_endpoint_shape():
    r = client.get("/stats/weekly")
    assert r.status_code == 200
    weeks = r.json()
    assert len(weeks) == 8
    assert weeks == sorted(weeks, key=lambda w: w["week_start"])
    assert len(client.get("/stats/weekly", params={"weeks": 4}).json()) == 4
    assert client.get("/stats/weekly", params={"weeks": 0}).status_code == 422

def test_exercise_progress():
    with SessionLocal() as db:
        ex = Exercise(name=f"Progress {uuid.uuid4().hex[:8]}")
        db.add(ex)
        db.commit()
        _logged_session(db, ex, datetime(2023, 3, 1, tzinfo=timezone.utc), [(100, 5, False), (100, 4, False)])
        _logged_session(db, ex, datetime(2023, 3, 8, tzinfo=timezone.utc), [(110, 5, False), (125, 3, False)])
        ex_id = ex.id
    body = client.get(f"/stats/exercises/{ex_id}").json()
    assert [p["max_weight"] for p in body["points"]] == [100, 125]
    assert body["points"][0]["volume"] == 900
    assert body["points"][1]["max_reps"] == 5
    assert body["starting_weight"] == 100 and body["current_weight"] == 125
    assert body["change_percent"] == 25.0

def test_exercise_progress_unknown_404():
    assert client.get("/stats/exercises/999999").status_code == 404
