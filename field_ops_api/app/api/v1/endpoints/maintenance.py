"""
Maintenance endpoints for API v1.

CRUD follows the single-path contract.  The workflow endpoints are:

* ``GET /maintenance/upcoming?days=N``: open records due in the next
  N days (30 by default), soonest first;
* ``PUT /maintenance/{id}/checklist``: replace the filled checklist;
* ``POST /maintenance/{id}/complete``: close the record once, with
  optional final notes and photos.
"""

from typing import Optional, Union

from fastapi import APIRouter, Query, status

from ....schemas.common import Page
from ....schemas.maintenance import (
    ChecklistSubmission,
    MaintenanceCompletion,
    MaintenanceCreate,
    MaintenanceRead,
    MaintenanceUpdate,
    UpcomingMaintenances,
)
from ....services.maintenance_service import MaintenanceService
from ..utils import http_error, parse_record_id

router = APIRouter()


@router.get("", response_model=Union[Page[MaintenanceRead], MaintenanceRead])
async def get_maintenances(
    record_id: Optional[str] = Query(None, alias="id"),
    busca: Optional[str] = None,
    maintenance_status: Optional[str] = Query(None, alias="status"),
    asset_type: Optional[str] = None,
    asset_id: Optional[str] = None,
    technician_id: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
) -> Union[Page[MaintenanceRead], MaintenanceRead]:
    if record_id:
        try:
            return await MaintenanceService.get_record(parse_record_id(record_id, MaintenanceService))
        except ValueError as e:
            raise http_error(e)
    return await MaintenanceService.list_maintenances(
        busca=busca,
        status=maintenance_status,
        asset_type=asset_type,
        asset_id=asset_id,
        technician_id=technician_id,
        page=page,
        limit=limit,
    )


@router.get("/upcoming", response_model=UpcomingMaintenances)
async def upcoming_maintenances(days: Optional[str] = None) -> UpcomingMaintenances:
    return await MaintenanceService.upcoming(days)


@router.post("", response_model=MaintenanceRead, status_code=status.HTTP_201_CREATED)
async def create_maintenance(maintenance_in: MaintenanceCreate) -> MaintenanceRead:
    try:
        return await MaintenanceService.create_record(maintenance_in)
    except ValueError as e:
        raise http_error(e)


@router.put("", response_model=MaintenanceRead)
async def update_maintenance(
    maintenance_in: Optional[MaintenanceUpdate] = None,
    record_id: Optional[str] = Query(None, alias="id"),
) -> MaintenanceRead:
    maintenance_id = parse_record_id(record_id, MaintenanceService)
    try:
        return await MaintenanceService.update_record(
            maintenance_id, maintenance_in.model_dump(exclude_unset=True) if maintenance_in else {}
        )
    except ValueError as e:
        raise http_error(e)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def delete_maintenance(record_id: Optional[str] = Query(None, alias="id")) -> None:
    maintenance_id = parse_record_id(record_id, MaintenanceService)
    try:
        await MaintenanceService.delete_record(maintenance_id)
    except ValueError as e:
        raise http_error(e)
    return None


@router.put("/{maintenance_id}/checklist", response_model=MaintenanceRead)
async def submit_checklist(maintenance_id: int, body: ChecklistSubmission) -> MaintenanceRead:
    """Replace the checklist of a maintenance record.

    ``checklist`` must be a list; anything else is rejected with 400.
    """
    try:
        return await MaintenanceService.update_checklist(maintenance_id, body.checklist)
    except ValueError as e:
        raise http_error(e)


@router.post("/{maintenance_id}/complete", response_model=MaintenanceRead)
async def complete_maintenance(
    maintenance_id: int,
    body: Optional[MaintenanceCompletion] = None,
) -> MaintenanceRead:
    """Mark the record completed.  400 if it already is."""
    try:
        return await MaintenanceService.complete(maintenance_id, body or MaintenanceCompletion())
    except ValueError as e:
        raise http_error(e)
