"""
Fuel supply endpoints for API v1.

Supplies are filtered by ``pop_id``, ``fuel_type`` and
``generator_id``; ``busca`` searches supplier, notes and fuel type.
Two read-only reports cover the last ``periodo`` days:
``/supplies/analytics/summary`` (30 by default) and
``/supplies/analytics/by-generator`` (90 by default).
"""

from typing import Optional, Union

from fastapi import APIRouter, Query, status

from ....schemas.common import Page
from ....schemas.supply import (
    SuppliesByGenerator,
    SupplyCreate,
    SupplyRead,
    SupplySummary,
    SupplyUpdate,
)
from ....services.supply_service import SupplyService
from ..utils import http_error, parse_record_id

router = APIRouter()


@router.get("", response_model=Union[Page[SupplyRead], SupplyRead])
async def get_supplies(
    record_id: Optional[str] = Query(None, alias="id"),
    busca: Optional[str] = None,
    pop_id: Optional[str] = None,
    fuel_type: Optional[str] = None,
    generator_id: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
) -> Union[Page[SupplyRead], SupplyRead]:
    if record_id:
        try:
            return await SupplyService.get_record(parse_record_id(record_id, SupplyService))
        except ValueError as e:
            raise http_error(e)
    return await SupplyService.list_supplies(
        busca=busca,
        pop_id=pop_id,
        fuel_type=fuel_type,
        generator_id=generator_id,
        page=page,
        limit=limit,
    )


@router.post("", response_model=SupplyRead, status_code=status.HTTP_201_CREATED)
async def create_supply(supply_in: SupplyCreate) -> SupplyRead:
    """Register a supply; ``supply_date`` defaults to now."""
    try:
        return await SupplyService.create_record(supply_in)
    except ValueError as e:
        raise http_error(e)


@router.put("", response_model=SupplyRead)
async def update_supply(
    supply_in: Optional[SupplyUpdate] = None,
    record_id: Optional[str] = Query(None, alias="id"),
) -> SupplyRead:
    supply_id = parse_record_id(record_id, SupplyService)
    try:
        updates = supply_in.model_dump(exclude_unset=True) if supply_in else {}
        return await SupplyService.update_record(supply_id, updates)
    except ValueError as e:
        raise http_error(e)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def delete_supply(record_id: Optional[str] = Query(None, alias="id")) -> None:
    supply_id = parse_record_id(record_id, SupplyService)
    try:
        await SupplyService.delete_record(supply_id)
    except ValueError as e:
        raise http_error(e)
    return None


@router.get("/analytics/summary", response_model=SupplySummary)
async def supply_summary(periodo: Optional[str] = None) -> SupplySummary:
    return await SupplyService.summary(periodo)


@router.get("/analytics/by-generator", response_model=SuppliesByGenerator)
async def supplies_by_generator(periodo: Optional[str] = None) -> SuppliesByGenerator:
    return await SupplyService.by_generator(periodo)
