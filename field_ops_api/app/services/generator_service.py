"""
Business logic for generators.

Besides CRUD, a generator exposes two histories assembled from other
resources: the fuel supplies delivered to it and the maintenance
records that target it.
"""

from typing import Any, Dict, List, Optional

from ..core.repository import TableRepository, utcnow
from ..schemas.generator import GeneratorRead
from ..schemas.maintenance import MaintenanceRead
from ..schemas.supply import SupplyRead
from .base import ResourceService
from .listing import coerce_int
from .maintenance_service import MaintenanceService
from .supply_service import SupplyService


class GeneratorService(ResourceService):
    repository = TableRepository("generators")
    read_schema = GeneratorRead
    label = "Generator"
    search_fields = ("name", "model", "serial_number")
    non_nullable = frozenset(
        {
            "name",
            "model",
            "manufacturer",
            "pop_id",
            "power_kva",
            "type",
            "fuel_type",
            "status",
            "running_hours",
            "fuel_level",
        }
    )

    @classmethod
    def _prepare_create(cls, values: Dict[str, Any]) -> Dict[str, Any]:
        if values.get("installed_at") is None:
            values["installed_at"] = utcnow()
        return values

    @classmethod
    async def list_generators(
        cls,
        busca: Optional[str] = None,
        status: Optional[str] = None,
        pop_id: Any = None,
        type: Optional[str] = None,
        page: Any = None,
        limit: Any = None,
    ) -> Dict[str, Any]:
        filters = {
            "status": status or None,
            "pop_id": coerce_int(pop_id),
            "type": type or None,
        }
        return await cls.list_records(busca=busca, page=page, limit=limit, filters=filters)

    @classmethod
    async def fuel_history(cls, generator_id: int) -> List[SupplyRead]:
        """Supplies delivered to the generator, oldest first.

        Raises ``NotFoundError`` if the generator does not exist.
        """
        await cls.get_record(generator_id)
        return await SupplyService.for_generator(generator_id)

    @classmethod
    async def maintenance_history(cls, generator_id: int) -> List[MaintenanceRead]:
        await cls.get_record(generator_id)
        return await MaintenanceService.for_asset("generator", generator_id)
