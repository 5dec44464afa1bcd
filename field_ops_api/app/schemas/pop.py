"""
Pydantic models for POPs (points of presence).

A POP is identified by a short unique ``code`` (e.g. ``POP-001``) in
addition to its numeric id.  Coordinates are optional so that a POP
can be registered before it is surveyed.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field

from .common import RecordRead

PopStatus = Literal["active", "maintenance", "inactive"]


class PopBase(BaseModel):
    name: str = Field(..., min_length=1, examples=["POP Central"])
    code: str = Field(..., min_length=1, examples=["POP-001"])
    address: Optional[str] = Field(None, examples=["Rua Principal, 123, Centro, São Paulo, SP"])
    latitude: Optional[float] = Field(None, examples=[-23.5505])
    longitude: Optional[float] = Field(None, examples=[-46.6333])
    status: PopStatus = "active"


class PopCreate(PopBase):
    """Schema for creating a POP."""
    pass


class PopUpdate(BaseModel):
    """Schema for updating a POP.

    All fields are optional; only provided fields are changed.
    """
    name: Optional[str] = Field(None, min_length=1)
    code: Optional[str] = Field(None, min_length=1)
    address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    status: Optional[PopStatus] = None


class PopRead(PopBase, RecordRead):
    """Schema for reading a POP from the API."""
    pass
