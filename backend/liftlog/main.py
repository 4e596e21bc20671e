# liftlog/main.py
import time
import logging
import uuid
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from liftlog.routers.exercises import router as exercises_router
from liftlog.routers.routines import router as routines_router
from liftlog.routers.equipment import router as equipment_router
from liftlog.routers.workout import router as workout_router
from liftlog.routers.sessions import router as sessions_router
from liftlog.routers.stats import router as stats_router
from liftlog.routers.programs import router as programs_router
from liftlog.routers.seed import router as seed_router
from liftlog.db import SessionLocal  # for healthz DB check
from liftlog.settings import get_settings

settings = get_settings()

log = logging.getLogger("uvicorn")
logging.getLogger("liftlog").setLevel(settings.LOG_LEVEL.upper())

app = FastAPI(
    title="LiftLog API",
    openapi_tags=[
        {"name": "exercises", "description": "Exercise library"},
        {"name": "routines", "description": "Routines, their exercises and progression rules"},
        {"name": "equipment", "description": "Bars, plates, dumbbells, machines and plate loadouts"},
        {"name": "workout", "description": "The workout in progress"},
        {"name": "sessions", "description": "Workout history"},
        {"name": "stats", "description": "Weekly and per-exercise statistics"},
        {"name": "programs", "description": "Program templates and recommendations"},
        {"name": "seed", "description": "Bundled library and default equipment"},
    ],
)

# CORS (relax for local dev; tighten origins in prod via env)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOW_ORIGINS.split(","),
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.middleware("http")
async def add_request_id_and_log(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    response.headers["X-Request-ID"] = req_id
    log.info("rid=%s %s %s -> %s in %.1fms",
             req_id, request.method, request.url.path, response.status_code, duration_ms)
    return response

@app.get("/")
def root():
    return {"ok": True, "name": "LiftLog API"}

@app.get("/ping")
def ping():
    return {"pong": True}

@app.get("/healthz")
def healthz():
    # Quick DB sanity check
    try:
        with SessionLocal() as db:
            db.execute(text("SELECT 1"))
        return {"status": "ok"}
    except Exception as e:
        return {"status": "degraded", "error": str(e)}

@app.get("/version")
def version():
    return {"version": settings.API_VERSION}

# Routers
app.include_router(exercises_router)
app.include_router(routines_router)
app.include_router(equipment_router)
app.include_router(workout_router)
app.include_router(sessions_router)
app.include_router(stats_router)
app.include_router(programs_router)
app.include_router(seed_router)
