# gearguard/main.py
import logging
import time
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.orm import Session

from .core.api import UTF8JSONResponse, ok
from .core.config import APP_NAME, AUTO_CREATE_DB, CORS_ALLOW_ORIGINS, DOTENV_PATH, SEED_DEMO
from .core.db import Base, engine, get_db
from .core.errors import install_error_handlers
from .core.logging import setup_logging
from . import models  # noqa: F401  (metadata dolsun)

# --- Router importları ---
from .routers.auth import router as auth_router
from .routers.users import router as users_router
from .routers.master_data import departments as departments_router, categories as categories_router
from .routers.teams import router as teams_router
from .routers.equipment import router as equipment_router
from .routers.maintenance import router as maintenance_router
from .routers.worksheets import router as worksheets_router
from .routers.work_centers import router as work_centers_router
from .routers.logs import router as logs_router
from .routers.reports import router as reports_router

setup_logging()
logger = logging.getLogger("gearguard")


# ---- startup: tablolar / demo verisi ----
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("%s starting (.env: %s)", APP_NAME, DOTENV_PATH or "not found")
    if AUTO_CREATE_DB:
        Base.metadata.create_all(bind=engine)
    if SEED_DEMO:
        from .scripts.seed import run as seed_run
        seed_run()
    yield


app = FastAPI(title=APP_NAME, default_response_class=UTF8JSONResponse, lifespan=lifespan)


# JSON Content-Type charset düzeltmesi + istek logu
@app.middleware("http")
async def _log_and_force_json_charset(request, call_next):
    started = time.perf_counter()
    resp = await call_next(request)
    ct = resp.headers.get("content-type", "")
    if ct.lower().startswith("application/json") and "charset=" not in ct.lower():
        resp.headers["content-type"] = "application/json; charset=utf-8"
    logger.info(
        "%s %s -> %s (%.1f ms)",
        request.method, request.url.path, resp.status_code, (time.perf_counter() - started) * 1000,
    )
    return resp


install_error_handlers(app)

# -----------------------------
# CORS yapılandırması (.env)
# -----------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    # cookie tabanlı oturum; '*' ile credentials birlikte kullanılamaz
    allow_credentials=CORS_ALLOW_ORIGINS != ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---- Sağlık uçları ----
@app.get("/health")
def health():
    return ok({"service": APP_NAME})

@app.get("/db-ping")
def db_ping(db: Session = Depends(get_db)):
    val = db.execute(text("SELECT 1")).scalar()
    return ok({"db": "ok", "select1": val})


# =========================
# Router kayıtları
# =========================
app.include_router(auth_router)          # /auth
app.include_router(users_router)         # /users
app.include_router(departments_router)   # /departments
app.include_router(categories_router)    # /categories
app.include_router(teams_router)         # /teams
app.include_router(equipment_router)     # /equipment
app.include_router(maintenance_router)   # /requests
app.include_router(worksheets_router)    # /requests/{id}/worksheets, /worksheets
app.include_router(work_centers_router)  # /work-centers
app.include_router(logs_router)          # /logs
app.include_router(reports_router)       # /reports
