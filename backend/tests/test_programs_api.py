from fastapi.testclient import TestClient
from liftlog.main import app

client = TestClient(app)

def test_templates_listed_camel_case():
    r = client.get("/programs/templates")
    assert r.status_code == 200
    templates = r.json()
    assert [t["id"] for t in templates] == [
        "starting_strength", "ppl", "upper_lower", "full_body_3x", "five_three_one",
    ]
    first = templates[0]
    assert first["experienceLevels"] == ["beginner"]
    assert first["days"][0]["exercises"][0]["exerciseName"] == "Barbell Back Squat"
    assert client.get("/programs/templates/nope").status_code == 404

def test_recommend_beginner_strength():
    r = client.post("/programs/recommend", json={
        "goal": "strength", "experience": "beginner", "days_per_week": 3,
        "available_equipment": ["barbell", "dumbbell"], "session_minutes": 60,
    })
    assert r.status_code == 200
    recs = r.json()
    assert [rec["template"]["id"] for rec in recs] == ["starting_strength", "upper_lower"]
    assert recs[0]["score"] == 100
    assert recs[0]["rationale"][0] == "Matches your Strength goal"
    assert recs[1]["score"] == 85
    assert "Close match: 4 days/week (you wanted 3)" in recs[1]["rationale"]

def test_recommend_missing_equipment_penalty():
    recs = client.post("/programs/recommend", json={
        "goal": "hypertrophy", "experience": "intermediate", "days_per_week": 6,
        "available_equipment": ["barbell"], "session_minutes": 75,
    }).json()
    assert [rec["template"]["id"] for rec in recs] == ["ppl"]
    assert recs[0]["score"] == 55
    assert "Missing equipment: Cable, Dumbbell" in recs[0]["rationale"]

def test_recommend_avoided_movements_penalised():
    base = {"goal": "strength", "experience": "beginner", "days_per_week": 3,
            "available_equipment": ["barbell"], "session_minutes": 60}
    plain = client.post("/programs/recommend", json=base).json()[0]
    avoid = client.post("/programs/recommend", json={**base, "movements_to_avoid": ["Deadlift"]}).json()[0]
    assert avoid["score"] < plain["score"]
    assert any("substitute" in line for line in avoid["rationale"])

def test_recommend_no_match():
    r = client.post("/programs/recommend", json={"goal": "powerlifting", "experience": "beginner",
                                                 "days_per_week": 6})
    assert r.status_code == 200
    assert r.json() == []

def test_recommend_validation():
    assert client.post("/programs/recommend", json={"goal": "cardio"}).status_code == 422
    assert client.post("/programs/recommend", json={"session_minutes": 50}).status_code == 422

def test_apply_template_creates_routines():
    r = client.post("/programs/templates/starting_strength/apply")
    assert r.status_code == 201
    routines = r.json()
    assert [rt["name"] for rt in routines] == ["Starting Strength - Workout A", "Starting Strength - Workout B"]
    for rt in routines:
        assert rt["is_template"] is True and rt["source"] == "Starting Strength"
        assert [e["order"] for e in rt["exercises"]] == list(range(len(rt["exercises"])))
        assert all(e["exercise_id"] is not None for e in rt["exercises"])
    listed = client.get("/routines", params={"is_template": True}).json()
    assert {rt["id"] for rt in routines} <= {rt["id"] for rt in listed}
    assert client.post("/programs/templates/nope/apply").status_code == 404
