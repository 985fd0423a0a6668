# gearguard/schemas/common.py
from datetime import datetime, timezone
from typing import Annotated, List

from pydantic import AfterValidator, Field


def to_naive_utc(v: datetime) -> datetime:
    # Naive verilirse UTC varsayılır; DB'ye naive UTC yazıyoruz
    if v is not None and v.tzinfo is not None:
        return v.astimezone(timezone.utc).replace(tzinfo=None)
    return v


def unique_ids(v: List[int]) -> List[int]:
    if v is not None and len(set(v)) != len(v):
        raise ValueError("duplicate ids are not allowed")
    return v


UTCDateTime = Annotated[datetime, AfterValidator(to_naive_utc)]
IdList = Annotated[List[Annotated[int, Field(ge=1)]], AfterValidator(unique_ids)]
