# gearguard/domain/constants.py

"""
Uygulama genelinde durum / rol / öncelik değerlerinin tek kaynağı.
"""

from typing import Final

# Kullanıcı rolleri
ROLE_ADMIN: Final[str] = "admin"
ROLE_TECHNICIAN: Final[str] = "technician"
ROLE_EMPLOYEE: Final[str] = "employee"
ALLOWED_ROLES: Final[tuple] = (ROLE_ADMIN, ROLE_TECHNICIAN, ROLE_EMPLOYEE)

# Ekipman / iş merkezi durumu
ASSET_ACTIVE: Final[str] = "active"
ASSET_SCRAPPED: Final[str] = "scrapped"
ASSET_STATUSES: Final[tuple] = (ASSET_ACTIVE, ASSET_SCRAPPED)

# Bakım talebi aşamaları (kanban sırası)
REQ_NEW: Final[str] = "new"
REQ_IN_PROGRESS: Final[str] = "in_progress"
REQ_REPAIRED: Final[str] = "repaired"
REQ_SCRAP: Final[str] = "scrap"
REQUEST_STATUSES: Final[tuple] = (REQ_NEW, REQ_IN_PROGRESS, REQ_REPAIRED, REQ_SCRAP)
OPEN_REQUEST_STATUSES: Final[tuple] = (REQ_NEW, REQ_IN_PROGRESS)

REQUEST_TYPES: Final[tuple] = ("corrective", "preventive")
PRIORITIES: Final[tuple] = ("low", "medium", "high")

# Talebin hedefi
TARGET_EQUIPMENT: Final[str] = "equipment"
TARGET_WORK_CENTER: Final[str] = "work_center"

# Activity log referans tipleri
REF_EQUIPMENT: Final[str] = "equipment"
REF_REQUEST: Final[str] = "request"
REF_TEAM: Final[str] = "team"
REF_WORK_CENTER: Final[str] = "work_center"
REF_USER: Final[str] = "user"
