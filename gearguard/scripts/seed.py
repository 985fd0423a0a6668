# gearguard/scripts/seed.py
"""
Demo verisi (idempotent). Tekrar çalıştırılırsa mevcut satırlar korunur.

    python -m gearguard.scripts.seed
"""
import logging
from contextlib import contextmanager
from datetime import date

from sqlalchemy import select

from ..core.db import SessionLocal
from ..core.security import hash_password
from ..domain.constants import ROLE_ADMIN, ROLE_EMPLOYEE, ROLE_TECHNICIAN
from ..models import AppUser, Category, Department, Equipment, Team, TeamMember, WorkCenter

logger = logging.getLogger(__name__)

# ---------- küçük yardımcılar ----------

@contextmanager
def session_scope():
    """Tek seferlik session aç/kapat (hata olursa rollback)."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

def get_one(db, model, **by):
    """Tekil alanlara göre satır getir (yoksa None)."""
    return db.execute(select(model).filter_by(**by)).scalars().first()

def get_or_create(db, model, unique_by: dict, defaults: dict | None = None):
    """unique_by ile ara, yoksa oluştur (idempotent)."""
    inst = get_one(db, model, **unique_by)
    if inst:
        return inst, False
    inst = model(**{**unique_by, **(defaults or {})})
    db.add(inst)
    db.flush()  # PK'lar ilişkili kayıtlarda lazım
    return inst, True

# ---------- tohum veriler ----------

DEMO_PASSWORD = "gearguard123"

USERS = [
    {"Username": "admin", "FullName": "System Admin", "Email": "admin@gearguard.io", "Role": ROLE_ADMIN},
    {"Username": "tech", "FullName": "Ali Usta", "Email": "tech@gearguard.io", "Role": ROLE_TECHNICIAN},
    {"Username": "user", "FullName": "Zeynep Operatör", "Email": "user@gearguard.io", "Role": ROLE_EMPLOYEE},
]

DEPARTMENTS = [
    {"Name": "Production", "Description": "Üretim hatları"},
    {"Name": "IT", "Description": "Bilgi işlem"},
]

CATEGORIES = [
    {"Name": "Machinery", "Description": "Üretim makineleri"},
    {"Name": "Computers", "Description": "Bilgisayar ve çevre birimleri"},
]

TEAMS = [
    {"Name": "Mechanics", "Specialization": "Mechanical"},
    {"Name": "IT Support", "Specialization": "IT"},
]

WORK_CENTERS = [
    {"Name": "Assembly Line 1", "Code": "WC-ASM-1", "CostPerHour": 120, "Capacity": 2, "OEETarget": 85},
]


def run() -> None:
    with session_scope() as db:
        logger.info("seeding users / departments / categories / teams")
        users = {}
        for u in USERS:
            users[u["Username"]], _ = get_or_create(
                db, AppUser, {"Username": u["Username"]},
                defaults={**u, "HashedPassword": hash_password(DEMO_PASSWORD)},
            )
        for d in DEPARTMENTS:
            get_or_create(db, Department, {"Name": d["Name"]}, defaults=d)
        for c in CATEGORIES:
            get_or_create(db, Category, {"Name": c["Name"]}, defaults=c)
        teams = {t["Name"]: get_or_create(db, Team, {"Name": t["Name"]}, defaults=t)[0] for t in TEAMS}

        mech = teams["Mechanics"]
        get_or_create(db, TeamMember, {"TeamID": mech.TeamID, "UserID": users["tech"].UserID})

        for wc in WORK_CENTERS:
            get_or_create(db, WorkCenter, {"Code": wc["Code"]}, defaults=wc)

    with session_scope() as db:
        logger.info("seeding equipment")
        mech = get_one(db, Team, Name="Mechanics")
        tech = get_one(db, AppUser, Username="tech")
        get_or_create(
            db, Equipment, {"SerialNumber": "CNC-0001"},
            defaults={
                "Name": "CNC Lathe",
                "CategoryID": get_one(db, Category, Name="Machinery").CategoryID,
                "DepartmentID": get_one(db, Department, Name="Production").DepartmentID,
                "Location": "Hall A",
                "PurchaseDate": date(2023, 3, 1),
                "MaintenanceTeamID": mech.TeamID,
                "DefaultTechnicianID": tech.UserID,
            },
        )
        get_or_create(
            db, Equipment, {"SerialNumber": "LT-2042"},
            defaults={
                "Name": "Office Laptop",
                "CategoryID": get_one(db, Category, Name="Computers").CategoryID,
                "DepartmentID": get_one(db, Department, Name="IT").DepartmentID,
                "MaintenanceTeamID": get_one(db, Team, Name="IT Support").TeamID,
            },
        )


if __name__ == "__main__":
    from ..core.logging import setup_logging
    setup_logging()
    run()
