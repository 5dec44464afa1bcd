"""
Schemas shared by every resource.

``Page`` is the envelope returned by list endpoints.  Its field names
(``dados``, ``pagina``, ``limite``, ``total_paginas``) are part of the
public contract consumed by the dashboard and must not be renamed.
"""

from datetime import datetime
from typing import Generic, List, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """One page of a filtered collection."""

    dados: List[T]
    total: int
    pagina: int
    limite: int
    total_paginas: int


class RecordRead(BaseModel):
    """Fields every stored record carries."""

    id: int
    created_at: datetime
    updated_at: datetime

    model_config = {
        "from_attributes": True,
    }


class Period(BaseModel):
    """Time window of a report; ``from`` is a reserved word in Python."""

    from_: datetime = Field(..., alias="from")
    to: datetime
    days: int

    model_config = {
        "populate_by_name": True,
    }
