"""
Pydantic models for generators installed at POPs.

``fuel_level`` is a percentage of tank capacity.  ``running_hours``
and ``power_kva`` default to zero for newly registered units.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from .common import RecordRead

GeneratorStatus = Literal["operational", "maintenance", "inactive"]
GeneratorType = Literal["primary", "backup"]


class GeneratorBase(BaseModel):
    name: str = Field(..., min_length=1, examples=["Gerador Principal"])
    model: str = Field(..., min_length=1, examples=["C150 D6"])
    manufacturer: str = Field(..., min_length=1, examples=["Cummins"])
    pop_id: int = Field(..., gt=0)
    serial_number: Optional[str] = None
    power_kva: float = Field(0, ge=0)
    type: GeneratorType = "primary"
    fuel_type: str = Field("diesel", min_length=1)
    status: GeneratorStatus = "operational"
    location: Optional[str] = None
    installed_at: Optional[datetime] = None
    last_maintenance: Optional[datetime] = None
    next_maintenance: Optional[datetime] = None
    running_hours: float = Field(0, ge=0)
    fuel_level: float = Field(0, ge=0, le=100)
    notes: Optional[str] = None

    model_config = {
        # ``model`` is a domain field here, not a pydantic namespace clash.
        "protected_namespaces": (),
    }


class GeneratorCreate(GeneratorBase):
    pass


class GeneratorUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    model: Optional[str] = Field(None, min_length=1)
    manufacturer: Optional[str] = Field(None, min_length=1)
    pop_id: Optional[int] = Field(None, gt=0)
    serial_number: Optional[str] = None
    power_kva: Optional[float] = Field(None, ge=0)
    type: Optional[GeneratorType] = None
    fuel_type: Optional[str] = Field(None, min_length=1)
    status: Optional[GeneratorStatus] = None
    location: Optional[str] = None
    installed_at: Optional[datetime] = None
    last_maintenance: Optional[datetime] = None
    next_maintenance: Optional[datetime] = None
    running_hours: Optional[float] = Field(None, ge=0)
    fuel_level: Optional[float] = Field(None, ge=0, le=100)
    notes: Optional[str] = None

    model_config = {
        "protected_namespaces": (),
    }


class GeneratorRead(GeneratorBase, RecordRead):
    model_config = {
        "from_attributes": True,
        "protected_namespaces": (),
    }
