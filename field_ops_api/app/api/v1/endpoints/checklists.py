"""
Checklist template endpoints for API v1.

Templates are listed with an optional ``active`` filter (``true`` or
``false``).  A template can be duplicated under a new name and its
usage inspected; deleting a template still referenced by maintenance
records returns 409.
"""

from typing import Optional, Union

from fastapi import APIRouter, Query, status

from ....schemas.checklist import (
    ChecklistDuplicate,
    ChecklistTemplateCreate,
    ChecklistTemplateRead,
    ChecklistTemplateUpdate,
    TemplateUsage,
)
from ....schemas.common import Page
from ....services.checklist_service import ChecklistService
from ..utils import http_error, parse_record_id

router = APIRouter()


@router.get("", response_model=Union[Page[ChecklistTemplateRead], ChecklistTemplateRead])
async def get_templates(
    record_id: Optional[str] = Query(None, alias="id"),
    busca: Optional[str] = None,
    active: Optional[str] = None,
    category: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
) -> Union[Page[ChecklistTemplateRead], ChecklistTemplateRead]:
    if record_id:
        try:
            return await ChecklistService.get_record(parse_record_id(record_id, ChecklistService))
        except ValueError as e:
            raise http_error(e)
    return await ChecklistService.list_templates(
        busca=busca, active=active, category=category, page=page, limit=limit
    )


@router.post("", response_model=ChecklistTemplateRead, status_code=status.HTTP_201_CREATED)
async def create_template(template_in: ChecklistTemplateCreate) -> ChecklistTemplateRead:
    try:
        return await ChecklistService.create_record(template_in)
    except ValueError as e:
        raise http_error(e)


@router.put("", response_model=ChecklistTemplateRead)
async def update_template(
    template_in: Optional[ChecklistTemplateUpdate] = None,
    record_id: Optional[str] = Query(None, alias="id"),
) -> ChecklistTemplateRead:
    template_id = parse_record_id(record_id, ChecklistService)
    try:
        return await ChecklistService.update_record(
            template_id, template_in.model_dump(exclude_unset=True) if template_in else {}
        )
    except ValueError as e:
        raise http_error(e)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def delete_template(record_id: Optional[str] = Query(None, alias="id")) -> None:
    template_id = parse_record_id(record_id, ChecklistService)
    try:
        await ChecklistService.delete_record(template_id)
    except ValueError as e:
        raise http_error(e)
    return None


@router.post(
    "/{template_id}/duplicate",
    response_model=ChecklistTemplateRead,
    status_code=status.HTTP_201_CREATED,
)
async def duplicate_template(
    template_id: int,
    body: Optional[ChecklistDuplicate] = None,
) -> ChecklistTemplateRead:
    """Copy a template; the copy is named ``"<name> (Copy)"`` by default."""
    try:
        return await ChecklistService.duplicate(template_id, body.name if body else None)
    except ValueError as e:
        raise http_error(e)


@router.get("/{template_id}/usage", response_model=TemplateUsage)
async def template_usage(template_id: int) -> TemplateUsage:
    try:
        return await ChecklistService.usage(template_id)
    except ValueError as e:
        raise http_error(e)
