"""
Pydantic models for activities (field work orders).

``assigned_to``, ``pop_id`` and ``generator_id`` are plain integer
references; nothing checks that the referenced rows exist.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from .common import RecordRead

ActivityStatus = Literal["pending", "in_progress", "completed", "cancelled"]
ActivityPriority = Literal["low", "medium", "high", "critical"]


class ActivityBase(BaseModel):
    title: str = Field(..., min_length=1, examples=["Air conditioning maintenance"])
    description: Optional[str] = Field(None, examples=["Check and clean the AC filters"])
    type: Optional[str] = Field(None, examples=["manutencao_ar_condicionado"])
    status: ActivityStatus = "pending"
    priority: ActivityPriority = "medium"
    assigned_to: Optional[int] = None
    pop_id: Optional[int] = None
    generator_id: Optional[int] = None
    scheduled_date: Optional[datetime] = None
    completed_date: Optional[datetime] = None


class ActivityCreate(ActivityBase):
    """Schema for creating an activity."""
    pass


class ActivityUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    type: Optional[str] = None
    status: Optional[ActivityStatus] = None
    priority: Optional[ActivityPriority] = None
    assigned_to: Optional[int] = None
    pop_id: Optional[int] = None
    generator_id: Optional[int] = None
    scheduled_date: Optional[datetime] = None
    completed_date: Optional[datetime] = None


class ActivityRead(ActivityBase, RecordRead):
    pass

