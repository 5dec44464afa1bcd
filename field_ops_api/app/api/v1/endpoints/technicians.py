"""
Technician endpoints for API v1.

``especialidade`` is a case-insensitive substring filter on the
specialization; ``status`` and ``pop_id`` are exact filters.  E-mail
addresses are unique: creating or renaming onto a taken address
returns 409.

``/technicians/{id}/activities`` pages through the activities assigned
to a technician.
"""

from typing import Optional, Union

from fastapi import APIRouter, Query, status

from ....schemas.activity import ActivityRead
from ....schemas.common import Page
from ....schemas.technician import TechnicianCreate, TechnicianRead, TechnicianUpdate
from ....services.technician_service import TechnicianService
from ..utils import http_error, parse_record_id

router = APIRouter()


@router.get("", response_model=Union[Page[TechnicianRead], TechnicianRead])
async def get_technicians(
    record_id: Optional[str] = Query(None, alias="id"),
    busca: Optional[str] = None,
    technician_status: Optional[str] = Query(None, alias="status"),
    especialidade: Optional[str] = None,
    pop_id: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
) -> Union[Page[TechnicianRead], TechnicianRead]:
    if record_id:
        try:
            return await TechnicianService.get_record(parse_record_id(record_id, TechnicianService))
        except ValueError as e:
            raise http_error(e)
    return await TechnicianService.list_technicians(
        busca=busca,
        status=technician_status,
        especialidade=especialidade,
        pop_id=pop_id,
        page=page,
        limit=limit,
    )


@router.post("", response_model=TechnicianRead, status_code=status.HTTP_201_CREATED)
async def create_technician(technician_in: TechnicianCreate) -> TechnicianRead:
    try:
        return await TechnicianService.create_record(technician_in)
    except ValueError as e:
        raise http_error(e)


@router.put("", response_model=TechnicianRead)
async def update_technician(
    technician_in: Optional[TechnicianUpdate] = None,
    record_id: Optional[str] = Query(None, alias="id"),
) -> TechnicianRead:
    technician_id = parse_record_id(record_id, TechnicianService)
    try:
        return await TechnicianService.update_record(
            technician_id, technician_in.model_dump(exclude_unset=True) if technician_in else {}
        )
    except ValueError as e:
        raise http_error(e)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def delete_technician(record_id: Optional[str] = Query(None, alias="id")) -> None:
    technician_id = parse_record_id(record_id, TechnicianService)
    try:
        await TechnicianService.delete_record(technician_id)
    except ValueError as e:
        raise http_error(e)
    return None


@router.get("/{technician_id}/activities", response_model=Page[ActivityRead])
async def technician_activities(
    technician_id: int,
    activity_status: Optional[str] = Query(None, alias="status"),
    page: Optional[str] = None,
    limit: Optional[str] = None,
) -> Page[ActivityRead]:
    """Activities assigned to the technician.  404 for an unknown technician."""
    try:
        return await TechnicianService.activities(
            technician_id, status=activity_status, page=page, limit=limit
        )
    except ValueError as e:
        raise http_error(e)
