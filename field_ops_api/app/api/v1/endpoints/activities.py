"""
Activity (work order) endpoints for API v1.

Same single-path contract as the other resources.  Listing filters by
``status``, ``priority``, ``type`` and ``pop_id`` and searches title
and description.
"""

from typing import Optional, Union

from fastapi import APIRouter, Query, status

from ....schemas.activity import ActivityCreate, ActivityRead, ActivityUpdate
from ....schemas.common import Page
from ....services.activity_service import ActivityService
from ..utils import http_error, parse_record_id

router = APIRouter()


@router.get("", response_model=Union[Page[ActivityRead], ActivityRead])
async def get_activities(
    record_id: Optional[str] = Query(None, alias="id"),
    busca: Optional[str] = None,
    activity_status: Optional[str] = Query(None, alias="status"),
    priority: Optional[str] = None,
    activity_type: Optional[str] = Query(None, alias="type"),
    pop_id: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
) -> Union[Page[ActivityRead], ActivityRead]:
    if record_id:
        try:
            return await ActivityService.get_record(parse_record_id(record_id, ActivityService))
        except ValueError as e:
            raise http_error(e)
    return await ActivityService.list_activities(
        busca=busca,
        status=activity_status,
        priority=priority,
        type=activity_type,
        pop_id=pop_id,
        page=page,
        limit=limit,
    )


@router.post("", response_model=ActivityRead, status_code=status.HTTP_201_CREATED)
async def create_activity(activity_in: ActivityCreate) -> ActivityRead:
    try:
        return await ActivityService.create_record(activity_in)
    except ValueError as e:
        raise http_error(e)


@router.put("", response_model=ActivityRead)
async def update_activity(
    activity_in: Optional[ActivityUpdate] = None,
    record_id: Optional[str] = Query(None, alias="id"),
) -> ActivityRead:
    activity_id = parse_record_id(record_id, ActivityService)
    try:
        return await ActivityService.update_record(
            activity_id, activity_in.model_dump(exclude_unset=True) if activity_in else {}
        )
    except ValueError as e:
        raise http_error(e)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def delete_activity(record_id: Optional[str] = Query(None, alias="id")) -> None:
    activity_id = parse_record_id(record_id, ActivityService)
    try:
        await ActivityService.delete_record(activity_id)
    except ValueError as e:
        raise http_error(e)
    return None
