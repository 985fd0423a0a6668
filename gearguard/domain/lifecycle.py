# gearguard/domain/lifecycle.py
"""
Bakım talebi ve ekipman için türetilmiş alan kuralları.

Buradaki fonksiyonlar saftır: DB'ye dokunmaz, sadece kolon adı -> değer
sözlükleri üzerinde çalışır. Servis katmanı sonucu ORM nesnesine yazar.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from .constants import (
    ASSET_ACTIVE,
    ASSET_SCRAPPED,
    REQ_IN_PROGRESS,
    REQ_NEW,
    REQ_SCRAP,
    TARGET_EQUIPMENT,
)


def apply_equipment_defaults(
    values: Dict[str, Any],
    equipment,
    technician_ids: Optional[List[int]],
) -> Tuple[Dict[str, Any], Optional[List[int]]]:
    """
    Yeni talepte ekipmanın varsayılan ekibini / teknisyenini uygular.

    - Hedef iş merkeziyse hiçbir şey türetilmez.
    - Ekipmanın bakım ekibi varsa istemcinin gönderdiği ekip ezilir.
    - Ekipmanın varsayılan teknisyeni varsa ve istemci teknisyen listesi
      göndermediyse: AssignedTechnicianID = varsayılan, liste = [varsayılan].
    """
    if equipment is None or values.get("MaintenanceFor", TARGET_EQUIPMENT) != TARGET_EQUIPMENT:
        return values, technician_ids

    out = dict(values)
    if equipment.MaintenanceTeamID:
        out["MaintenanceTeamID"] = equipment.MaintenanceTeamID

    if equipment.DefaultTechnicianID and not technician_ids:
        out["AssignedTechnicianID"] = equipment.DefaultTechnicianID
        technician_ids = [equipment.DefaultTechnicianID]

    return out, technician_ids


def apply_schedule_transition(current_status: str, changes: Dict[str, Any]) -> Dict[str, Any]:
    """'new' durumundaki talebe dolu bir ScheduledDate yazılırsa -> 'in_progress'."""
    if current_status == REQ_NEW and changes.get("ScheduledDate") is not None:
        return {**changes, "Status_s": REQ_IN_PROGRESS}
    return changes


def needs_scrap_cascade(status: str, equipment_id: Optional[int]) -> bool:
    # sonuç durumu 'scrap' ise her yazımda; önceki durum önemli değil
    return status == REQ_SCRAP and equipment_id is not None


def equipment_scrap_state(
    changes: Dict[str, Any],
    current_scrap_date: Optional[datetime],
    now: datetime,
) -> Dict[str, Any]:
    """
    Status_s ve ScrapDate'i birbirine göre hesaplar.

    ScrapDate gönderildiyse durum ondan türetilir; yalnız Status_s
    gönderildiyse tarih ondan türetilir. İkisi de yoksa mevcut tarih esas alınır.
    """
    if "ScrapDate" in changes:
        scrap_date = changes["ScrapDate"]
        return {"ScrapDate": scrap_date, "Status_s": ASSET_SCRAPPED if scrap_date else ASSET_ACTIVE}

    status_s = changes.get("Status_s")
    if status_s == ASSET_SCRAPPED:
        return {"Status_s": ASSET_SCRAPPED, "ScrapDate": current_scrap_date or now}
    if status_s == ASSET_ACTIVE:
        return {"Status_s": ASSET_ACTIVE, "ScrapDate": None}

    return {
        "Status_s": ASSET_SCRAPPED if current_scrap_date else ASSET_ACTIVE,
        "ScrapDate": current_scrap_date,
    }
