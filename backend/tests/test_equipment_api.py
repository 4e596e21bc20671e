from fastapi.testclient import TestClient
from liftlog.main import app

client = TestClient(app)

def test_default_equipment_seeded():
    bars = client.get("/equipment/barbells").json()
    assert any(b["is_default"] and b["weight"] == 45 for b in bars)
    plates = client.get("/equipment/plates").json()
    weights = [p["weight"] for p in plates]
    assert weights == sorted(weights, reverse=True)
    assert {45, 35, 25, 10, 5, 2.5} <= set(weights)

def test_loadout_examples():
    r = client.get("/equipment/loadout", params={"target_weight": 135})
    assert r.status_code == 200
    body = r.json()
    assert body["bar_weight"] == 45
    assert [p["weight"] for p in body["plates_per_side"]] == [45]
    assert body["is_exact"] is True and body["summary"] == "1x45"

    body = client.get("/equipment/loadout", params={"target_weight": 140}).json()
    assert [p["weight"] for p in body["plates_per_side"]] == [45, 2.5]
    assert body["total_weight"] == 140

def test_loadout_explicit_bar():
    body = client.get("/equipment/loadout", params={"target_weight": 25, "bar_weight": 35}).json()
    assert body["plates_per_side"] == []
    assert body["total_weight"] == 35 and body["difference"] == 10
    assert body["is_exact"] is False and body["summary"] == "Bar only"

def test_loadout_validation():
    assert client.get("/equipment/loadout").status_code == 422
    assert client.get("/equipment/loadout", params={"target_weight": -5}).status_code == 422

def test_barbell_crud_keeps_single_default():
    r = client.post("/equipment/barbells", json={"name": "Women's Bar", "weight": 33, "is_default": False})
    assert r.status_code == 201
    bar_id = r.json()["id"]
    assert sum(1 for b in client.get("/equipment/barbells").json() if b["is_default"]) == 1
    assert client.delete(f"/equipment/barbells/{bar_id}").status_code == 204
    assert client.delete(f"/equipment/barbells/{bar_id}").status_code == 404

def test_plate_crud():
    r = client.post("/equipment/plates", json={"weight": 1.25, "count": 2, "color": "silver"})
    assert r.status_code == 201
    plate = r.json()
    assert plate["unit"] == "lb"
    assert client.delete(f"/equipment/plates/{plate['id']}").status_code == 204

def test_dumbbells_sorted_unique():
    r = client.post("/equipment/dumbbells", json={"available_weights": [25, 10, 15, 10], "unit": "kg"})
    assert r.status_code == 201
    assert r.json()["available_weights"] == [10, 15, 25]
    client.delete(f"/equipment/dumbbells/{r.json()['id']}")

def test_machine_range_validated():
    bad = {"name": "Leg Press", "min_weight": 200, "max_weight": 100, "increment": 10}
    assert client.post("/equipment/machines", json=bad).status_code == 422
    ok = {"name": "Leg Press", "min_weight": 0, "max_weight": 700, "increment": 10}
    r = client.post("/equipment/machines", json=ok)
    assert r.status_code == 201
    assert any(m["id"] == r.json()["id"] for m in client.get("/equipment/machines").json())

def test_cable_attachments():
    r = client.post("/equipment/cables", json={"name": "Rope"})
    assert r.status_code == 201
    assert client.get("/equipment/cables").json()[-1]["name"] == "Rope"
    assert client.post("/equipment/cables", json={"name": ""}).status_code == 422

def test_loadout_in_kilograms_converts_stored_equipment():
    body = client.get("/equipment/loadout", params={"target_weight": 20.41, "unit": "kg"}).json()
    assert body["unit"] == "kg"
    # the seeded 45 lb bar
    assert body["bar_weight"] == 20.41
    assert body["plates_per_side"] == [] and body["is_exact"] is True

    body = client.get("/equipment/loadout", params={"target_weight": 135}).json()
    assert body["unit"] == "lb" and body["bar_weight"] == 45
