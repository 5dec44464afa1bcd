"""
POP endpoints for API v1.

A single path serves the whole resource: ``GET /pops`` lists POPs (or
returns one when ``?id=`` is given), ``POST`` creates, and ``PUT`` /
``DELETE`` with ``?id=`` update or remove a POP.  Listing supports
free-text search (``busca``) over name, code and address plus an exact
``status`` filter.
"""

from typing import Optional, Union

from fastapi import APIRouter, Query, status

from ....schemas.common import Page
from ....schemas.pop import PopCreate, PopRead, PopUpdate
from ....services.pop_service import PopService
from ..utils import http_error, parse_record_id

router = APIRouter()


@router.get("", response_model=Union[Page[PopRead], PopRead])
async def get_pops(
    record_id: Optional[str] = Query(None, alias="id"),
    busca: Optional[str] = None,
    pop_status: Optional[str] = Query(None, alias="status"),
    page: Optional[str] = None,
    limit: Optional[str] = None,
) -> Union[Page[PopRead], PopRead]:
    """List POPs, or return a single POP when ``id`` is given.

    Invalid ``page``/``limit`` values fall back to the defaults instead
    of failing the request.
    """
    if record_id:
        try:
            return await PopService.get_record(parse_record_id(record_id, PopService))
        except ValueError as e:
            raise http_error(e)
    return await PopService.list_pops(busca=busca, status=pop_status, page=page, limit=limit)


@router.post("", response_model=PopRead, status_code=status.HTTP_201_CREATED)
async def create_pop(pop_in: PopCreate) -> PopRead:
    """Create a POP.  Returns 409 when the code is already taken."""
    try:
        return await PopService.create_record(pop_in)
    except ValueError as e:
        raise http_error(e)


@router.put("", response_model=PopRead)
async def update_pop(
    pop_in: Optional[PopUpdate] = None,
    record_id: Optional[str] = Query(None, alias="id"),
) -> PopRead:
    """Update the fields present in the body; the others are kept."""
    pop_id = parse_record_id(record_id, PopService)
    try:
        updates = pop_in.model_dump(exclude_unset=True) if pop_in else {}
        return await PopService.update_record(pop_id, updates)
    except ValueError as e:
        raise http_error(e)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def delete_pop(record_id: Optional[str] = Query(None, alias="id")) -> None:
    pop_id = parse_record_id(record_id, PopService)
    try:
        await PopService.delete_record(pop_id)
    except ValueError as e:
        raise http_error(e)
    return None
