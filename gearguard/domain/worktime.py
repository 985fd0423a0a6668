# gearguard/domain/worktime.py
from datetime import datetime
from typing import Iterable, Optional


def worksheet_hours(start: Optional[datetime], end: Optional[datetime]) -> float:
    """Bir worksheet satırının saati; ters aralık 0'a kırpılır."""
    if start is None or end is None:
        return 0.0
    return max(0.0, (end - start).total_seconds() / 3600.0)


def total_logged_hours(entries: Iterable) -> float:
    return sum(worksheet_hours(e.StartTime, e.EndTime) for e in entries)


def is_overtime(total_hours: float, estimated_hours: Optional[float]) -> bool:
    # tahmin yoksa / sıfırsa değerlendirilmez
    if not estimated_hours:
        return False
    return total_hours > estimated_hours
