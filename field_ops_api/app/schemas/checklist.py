"""
Pydantic models for maintenance checklist templates.

A template is an ordered list of items; technicians fill a copy of the
items in during a maintenance visit (see ``MaintenanceRead.checklist``).
Item ids are strings chosen by the client so that filled checklists
can be traced back to the template they came from.
"""

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field

from .common import RecordRead

ChecklistItemType = Literal[
    "task",
    "free_text",
    "number",
    "multiple_choice",
    "yes_no",
    "photo_upload",
]


class ChecklistItem(BaseModel):
    """One inspection step of a template."""

    id: str = Field(..., min_length=1)
    type: ChecklistItemType
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    required: bool = False
    options: Optional[List[str]] = None


class ChecklistTemplateBase(BaseModel):
    name: str = Field(..., min_length=1, examples=["Preventiva de gerador"])
    description: str = ""
    category: Optional[str] = None
    items: List[ChecklistItem]
    active: bool = True


class ChecklistTemplateCreate(ChecklistTemplateBase):
    pass


class ChecklistTemplateUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    category: Optional[str] = None
    items: Optional[List[ChecklistItem]] = None
    active: Optional[bool] = None


class ChecklistTemplateRead(ChecklistTemplateBase, RecordRead):
    pass


class ChecklistDuplicate(BaseModel):
    """Optional new name for a duplicated template."""

    name: Optional[str] = None


class TemplateUsage(BaseModel):
    template_id: int
    template_name: str
    usage_count: int
    used_in_maintenances: List[Any]
