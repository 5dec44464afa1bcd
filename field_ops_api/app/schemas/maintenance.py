"""
Pydantic models for maintenance records.

A maintenance record targets one asset (``asset_type`` + ``asset_id``,
e.g. a generator or a POP) and carries the filled checklist and the
photo URLs gathered during the visit.  Checklist entries are stored as
free‑form objects; only their ``id`` is interpreted (to relate them to
templates).
"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from .common import Period, RecordRead

MaintenanceStatus = Literal["scheduled", "in_progress", "completed", "overdue"]
MaintenanceFrequency = Literal["once", "monthly", "quarterly", "semiannual"]


class MaintenanceBase(BaseModel):
    title: str = Field(..., min_length=1, examples=["Preventiva mensal"])
    asset_type: str = Field(..., min_length=1, examples=["generator"])
    asset_id: int = Field(..., gt=0)
    technician_id: int = Field(..., gt=0)
    asset_name: str = ""
    status: MaintenanceStatus = "scheduled"
    scheduled_date: Optional[datetime] = None
    completed_date: Optional[datetime] = None
    frequency: MaintenanceFrequency = "once"
    checklist: List[Dict[str, Any]] = Field(default_factory=list)
    notes: str = ""
    photo_urls: List[str] = Field(default_factory=list)
    activity_id: Optional[int] = None


class MaintenanceCreate(MaintenanceBase):
    pass


class MaintenanceUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    asset_type: Optional[str] = Field(None, min_length=1)
    asset_id: Optional[int] = Field(None, gt=0)
    technician_id: Optional[int] = Field(None, gt=0)
    asset_name: Optional[str] = None
    status: Optional[MaintenanceStatus] = None
    scheduled_date: Optional[datetime] = None
    completed_date: Optional[datetime] = None
    frequency: Optional[MaintenanceFrequency] = None
    checklist: Optional[List[Dict[str, Any]]] = None
    notes: Optional[str] = None
    photo_urls: Optional[List[str]] = None
    activity_id: Optional[int] = None


class MaintenanceRead(MaintenanceBase, RecordRead):
    pass


class ChecklistSubmission(BaseModel):
    """Body of ``PUT /maintenance/{id}/checklist``."""

    checklist: List[Dict[str, Any]]


class MaintenanceCompletion(BaseModel):
    """Body of ``POST /maintenance/{id}/complete``."""

    final_notes: Optional[str] = None
    final_photos: List[str] = Field(default_factory=list)


class UpcomingMaintenances(BaseModel):
    dados: List[MaintenanceRead]
    total: int
    period: Period
