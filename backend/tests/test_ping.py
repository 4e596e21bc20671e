from fastapi.testclient import TestClient
from liftlog.main import app

client = TestClient(app)

def test_ping():
    r = client.get("/ping")
    assert r.status_code == 200
    assert r.json() == {"pong": True}

def test_root_and_version():
    assert client.get("/").json() == {"ok": True, "name": "LiftLog API"}
    assert client.get("/version").json() == {"version": "dev"}

def test_request_id_echoed():
    r = client.get("/ping", headers={"X-Request-ID": "abc-123"})
    assert r.headers["X-Request-ID"] == "abc-123"
    assert client.get("/ping").headers["X-Request-ID"]
