"""
Pydantic models for technicians.

The e‑mail address doubles as a natural key and must be unique; the
service rejects duplicates with HTTP 409.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field

from .common import RecordRead

TechnicianStatus = Literal["active", "vacation", "inactive"]


class TechnicianBase(BaseModel):
    name: str = Field(..., min_length=1, examples=["João Silva"])
    email: str = Field(..., min_length=1, examples=["joao.silva@empresa.com"])
    phone: Optional[str] = Field(None, examples=["(11) 99999-1111"])
    specialization: Optional[str] = Field(None, examples=["Ar Condicionado"])
    status: TechnicianStatus = "active"
    access_level: str = Field("technician", min_length=1)
    pop_id: Optional[int] = None


class TechnicianCreate(TechnicianBase):
    pass


class TechnicianUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = Field(None, min_length=1)
    phone: Optional[str] = None
    specialization: Optional[str] = None
    status: Optional[TechnicianStatus] = None
    access_level: Optional[str] = Field(None, min_length=1)
    pop_id: Optional[int] = None


class TechnicianRead(TechnicianBase, RecordRead):
    pass
