# liftbook/main.py
import os
import time
import logging
import uuid
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from liftbook.routers.sessions import router as sessions_router
from liftbook.routers.sets import router as sets_router
from liftbook.routers.records import router as records_router
from liftbook.routers.achievements import router as achievements_router
from liftbook.routers.challenges import router as challenges_router
from liftbook.routers.stats import router as stats_router
from liftbook.db import SessionLocal  # for healthz DB check
from liftbook.settings import get_settings

logging.basicConfig(
    level=get_settings().LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
log = logging.getLogger("uvicorn")

app = FastAPI(
    title="Liftbook API",
    openapi_tags=[
        {"name": "sessions", "description": "Workout sessions"},
        {"name": "sets", "description": "Logged sets; every change re-derives personal records"},
        {"name": "records", "description": "Personal records"},
        {"name": "achievements", "description": "Achievement unlocks"},
        {"name": "challenges", "description": "Challenge progress"},
        {"name": "stats", "description": "Derived training stats"},
    ],
)


# CORS (relax for local dev; tighten origins in prod via env)
ALLOW_ORIGINS = os.getenv("ALLOW_ORIGINS", "*").split(",")
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOW_ORIGINS,
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
    return {"ok": True, "name": "Liftbook API"}

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
    return {"version": os.getenv("API_VERSION", "dev")}

# Routers
app.include_router(sessions_router)
app.include_router(sets_router)
app.include_router(records_router)
app.include_router(achievements_router)
app.include_router(challenges_router)
app.include_router(stats_router)
