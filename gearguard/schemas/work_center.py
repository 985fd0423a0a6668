# gearguard/schemas/work_center.py
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import List, Optional, Literal

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

MONEY_PLACES = Decimal("0.01")  # 2 hane


def _money(v) -> Decimal:
    if v is None:
        return v
    # Sayıyı 2 haneye ROUND_HALF_UP yuvarla, >= 0 doğrula
    try:
        d = (v if isinstance(v, Decimal) else Decimal(str(v))).quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)
    except (InvalidOperation, TypeError, ValueError):
        raise ValueError("CostPerHour must be a valid decimal")
    if d < 0:
        raise ValueError("CostPerHour must be >= 0")
    return d


class WorkCenterCreate(BaseModel):
    Name: str = Field(min_length=1, max_length=200)
    Code: str = Field(min_length=1, max_length=50)
    Tag: Optional[str] = None
    AlternativeWorkCenters: List[str] = []
    CostPerHour: Decimal = Decimal("0")
    Capacity: float = Field(default=1, gt=0)
    TimeEfficiency: float = Field(default=100, ge=0, le=100)
    OEETarget: float = Field(default=0, ge=0, le=100)
    Status_s: Literal["active", "scrapped"] = "active"

    @field_validator("CostPerHour")
    @classmethod
    def _cost_decimal(cls, v):
        return _money(v)


class WorkCenterUpdate(BaseModel):
    Name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    Code: Optional[str] = Field(default=None, min_length=1, max_length=50)
    Tag: Optional[str] = None
    AlternativeWorkCenters: Optional[List[str]] = None
    CostPerHour: Optional[Decimal] = None
    Capacity: Optional[float] = Field(default=None, gt=0)
    TimeEfficiency: Optional[float] = Field(default=None, ge=0, le=100)
    OEETarget: Optional[float] = Field(default=None, ge=0, le=100)
    Status_s: Optional[Literal["active", "scrapped"]] = None

    @field_validator("CostPerHour")
    @classmethod
    def _cost_decimal(cls, v):
        return _money(v)


class WorkCenterRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    WorkCenterID: int
    Name: str
    Code: str
    Tag: Optional[str] = None
    AlternativeWorkCenters: List[str] = []
    CostPerHour: Decimal
    Capacity: float
    TimeEfficiency: float
    OEETarget: float
    Status_s: Literal["active", "scrapped"]

    # İstemci basit görsün diye JSON'da float döndürüyoruz
    @field_serializer("CostPerHour")
    def _ser_cost(self, v: Decimal):
        return float(v)
