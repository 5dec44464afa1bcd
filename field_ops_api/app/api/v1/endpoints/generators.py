"""
Generator endpoints for API v1.

Besides the single-path CRUD contract, each generator has two read-only
histories: the fuel supplies delivered to it and the maintenance
records whose asset is that generator.
"""

from typing import List, Optional, Union

from fastapi import APIRouter, Query, status

from ....schemas.common import Page
from ....schemas.generator import GeneratorCreate, GeneratorRead, GeneratorUpdate
from ....schemas.maintenance import MaintenanceRead
from ....schemas.supply import SupplyRead
from ....services.generator_service import GeneratorService
from ..utils import http_error, parse_record_id

router = APIRouter()


@router.get("", response_model=Union[Page[GeneratorRead], GeneratorRead])
async def get_generators(
    record_id: Optional[str] = Query(None, alias="id"),
    busca: Optional[str] = None,
    generator_status: Optional[str] = Query(None, alias="status"),
    pop_id: Optional[str] = None,
    generator_type: Optional[str] = Query(None, alias="type"),
    page: Optional[str] = None,
    limit: Optional[str] = None,
) -> Union[Page[GeneratorRead], GeneratorRead]:
    if record_id:
        try:
            return await GeneratorService.get_record(parse_record_id(record_id, GeneratorService))
        except ValueError as e:
            raise http_error(e)
    return await GeneratorService.list_generators(
        busca=busca,
        status=generator_status,
        pop_id=pop_id,
        type=generator_type,
        page=page,
        limit=limit,
    )


@router.post("", response_model=GeneratorRead, status_code=status.HTTP_201_CREATED)
async def create_generator(generator_in: GeneratorCreate) -> GeneratorRead:
    try:
        return await GeneratorService.create_record(generator_in)
    except ValueError as e:
        raise http_error(e)


@router.put("", response_model=GeneratorRead)
async def update_generator(
    generator_in: Optional[GeneratorUpdate] = None,
    record_id: Optional[str] = Query(None, alias="id"),
) -> GeneratorRead:
    generator_id = parse_record_id(record_id, GeneratorService)
    try:
        return await GeneratorService.update_record(
            generator_id, generator_in.model_dump(exclude_unset=True) if generator_in else {}
        )
    except ValueError as e:
        raise http_error(e)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def delete_generator(record_id: Optional[str] = Query(None, alias="id")) -> None:
    generator_id = parse_record_id(record_id, GeneratorService)
    try:
        await GeneratorService.delete_record(generator_id)
    except ValueError as e:
        raise http_error(e)
    return None


@router.get("/{generator_id}/fuel-history", response_model=List[SupplyRead])
async def generator_fuel_history(generator_id: int) -> List[SupplyRead]:
    """Supplies delivered to the generator.  404 for an unknown generator."""
    try:
        return await GeneratorService.fuel_history(generator_id)
    except ValueError as e:
        raise http_error(e)


@router.get("/{generator_id}/maintenance-history", response_model=List[MaintenanceRead])
async def generator_maintenance_history(generator_id: int) -> List[MaintenanceRead]:
    try:
        return await GeneratorService.maintenance_history(generator_id)
    except ValueError as e:
        raise http_error(e)
