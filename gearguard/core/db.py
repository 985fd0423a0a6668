# gearguard/core/db.py
import os
from datetime import datetime, timezone
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.engine import make_url

from .config import DOTENV_PATH

DSN = os.environ.get("DATABASE_URL") or os.environ.get("MSSQL_DSN")
if not DSN or not DSN.strip():
    raise RuntimeError(f"DATABASE_URL / MSSQL_DSN is not set. .env: {DOTENV_PATH or '(not found)'}")

url = make_url(DSN)
engine_kwargs = dict(pool_pre_ping=True)

# Dialect'e göre güvenli ayarlar
backend = url.get_backend_name()  # örn: 'sqlite', 'mssql', 'postgresql'
if backend.startswith("sqlite"):
    # SQLite'ta thread check'i kapat, pool boyutu argümanları verme
    engine_kwargs["connect_args"] = {"check_same_thread": False}
elif backend.startswith("mssql"):
    engine_kwargs.update(pool_size=5, max_overflow=10, fast_executemany=True)
else:
    engine_kwargs.update(pool_size=5, max_overflow=10)

engine = create_engine(DSN, **engine_kwargs)

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def utcnow() -> datetime:
    # DB'de naive UTC tutuyoruz (SQLite / MSSQL DATETIME)
    return datetime.now(timezone.utc).replace(tzinfo=None)
