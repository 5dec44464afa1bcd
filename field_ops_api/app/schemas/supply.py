"""
Pydantic models for fuel supplies.

A supply records fuel delivered to a POP (and optionally to one of
its generators).  ``quantity`` must be positive; ``supply_date``
defaults to the time of registration.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from .common import Period, RecordRead


class SupplyBase(BaseModel):
    pop_id: int = Field(..., gt=0, examples=[1])
    generator_id: Optional[int] = None
    fuel_type: str = Field(..., min_length=1, examples=["diesel"])
    quantity: float = Field(..., gt=0, examples=[500])
    unit: str = Field("liters", min_length=1)
    cost: Optional[float] = Field(None, ge=0, examples=[2500.0])
    supplier: str = Field(..., min_length=1, examples=["Posto Shell"])
    supply_date: Optional[datetime] = None
    notes: str = ""


class SupplyCreate(SupplyBase):
    pass


class SupplyUpdate(BaseModel):
    pop_id: Optional[int] = Field(None, gt=0)
    generator_id: Optional[int] = None
    fuel_type: Optional[str] = Field(None, min_length=1)
    quantity: Optional[float] = Field(None, gt=0)
    unit: Optional[str] = Field(None, min_length=1)
    cost: Optional[float] = Field(None, ge=0)
    supplier: Optional[str] = Field(None, min_length=1)
    supply_date: Optional[datetime] = None
    notes: Optional[str] = None


class SupplyRead(SupplyBase, RecordRead):
    pass


class SupplySummary(BaseModel):
    """Totals over the supplies delivered in the last ``period.days`` days."""

    total_supplies: int
    total_quantity: float
    total_cost: float
    average_cost_per_unit: float
    generators_supplied: int
    suppliers: List[str]
    fuel_types: List[str]
    period: Period


class GeneratorSupplyStats(BaseModel):
    generator_id: int
    generator_name: Optional[str] = None
    total_supplies: int
    total_quantity: float
    total_cost: float
    average_quantity: float
    last_supply_date: Optional[datetime] = None


class SuppliesByGenerator(BaseModel):
    dados: List[GeneratorSupplyStats]
    period: Period
