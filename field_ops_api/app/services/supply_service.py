"""
Business logic for fuel supplies.

A supply without an explicit ``supply_date`` is dated at the moment it
is registered; the dashboard's monthly cost figures and the analytics
windows below depend on that date.
"""

from datetime import timedelta
from typing import Any, Dict, List, Optional, Tuple

from ..core.repository import TableRepository, parse_timestamp, utcnow
from ..schemas.supply import SupplyRead
from .base import ResourceService
from .listing import coerce_int

DEFAULT_SUMMARY_DAYS = 30
DEFAULT_BY_GENERATOR_DAYS = 90

# Read directly: GeneratorService itself depends on this module.
_generators = TableRepository("generators")


class SupplyService(ResourceService):
    repository = TableRepository("supplies")
    read_schema = SupplyRead
    label = "Supply"
    search_fields = ("supplier", "notes", "fuel_type")
    non_nullable = frozenset({"pop_id", "fuel_type", "quantity", "unit", "supplier", "notes"})

    @classmethod
    def _prepare_create(cls, values: Dict[str, Any]) -> Dict[str, Any]:
        if values.get("supply_date") is None:
            values["supply_date"] = utcnow()
        return values

    @classmethod
    async def list_supplies(
        cls,
        busca: Optional[str] = None,
        pop_id: Any = None,
        fuel_type: Optional[str] = None,
        generator_id: Any = None,
        page: Any = None,
        limit: Any = None,
    ) -> Dict[str, Any]:
        filters = {
            "pop_id": coerce_int(pop_id),
            "fuel_type": fuel_type or None,
            "generator_id": coerce_int(generator_id),
        }
        return await cls.list_records(busca=busca, page=page, limit=limit, filters=filters)

    @classmethod
    async def for_generator(cls, generator_id: int) -> List[SupplyRead]:
        rows = cls.repository.list({"generator_id": generator_id})
        return [SupplyRead.model_validate(row) for row in rows]

    @classmethod
    def _since(cls, days: Any, default: int) -> Tuple[List[Dict[str, Any]], Dict[str, Any]]:
        """Rows supplied in the last ``days`` days plus the window itself."""
        days_back = coerce_int(days, default, minimum=0)
        end = utcnow()
        start = end - timedelta(days=days_back)
        rows = []
        for row in cls.repository.list():
            supplied_at = parse_timestamp(row.get("supply_date"))
            if supplied_at is not None and supplied_at >= start:
                rows.append(row)
        return rows, {"from": start, "to": end, "days": days_back}

    @classmethod
    async def summary(cls, periodo: Any = None) -> Dict[str, Any]:
        """Totals for the supplies of the last ``periodo`` days (30 by default).

        A supply without a cost counts as zero.  ``average_cost_per_unit``
        is the total cost divided by the total quantity.
        """
        rows, period = cls._since(periodo, DEFAULT_SUMMARY_DAYS)
        total_quantity = sum(row["quantity"] for row in rows)
        total_cost = sum(row.get("cost") or 0 for row in rows)
        return {
            "total_supplies": len(rows),
            "total_quantity": total_quantity,
            "total_cost": total_cost,
            "average_cost_per_unit": total_cost / total_quantity if total_quantity else 0,
            "generators_supplied": len({row["generator_id"] for row in rows if row.get("generator_id")}),
            "suppliers": list(dict.fromkeys(row["supplier"] for row in rows if row.get("supplier"))),
            "fuel_types": list(dict.fromkeys(row["fuel_type"] for row in rows)),
            "period": period,
        }

    @classmethod
    async def by_generator(cls, periodo: Any = None) -> Dict[str, Any]:
        """Per-generator totals for the last ``periodo`` days (90 by default).

        Supplies not tied to a generator are left out.  Generators appear
        in the order of their first supply in the window.
        """
        rows, period = cls._since(periodo, DEFAULT_BY_GENERATOR_DAYS)
        stats: Dict[int, Dict[str, Any]] = {}
        for row in rows:
            generator_id = row.get("generator_id")
            if not generator_id:
                continue
            entry = stats.get(generator_id)
            if entry is None:
                generator = _generators.get(generator_id)
                entry = stats[generator_id] = {
                    "generator_id": generator_id,
                    "generator_name": generator["name"] if generator else None,
                    "total_supplies": 0,
                    "total_quantity": 0,
                    "total_cost": 0,
                    "last_supply_date": None,
                }
            entry["total_supplies"] += 1
            entry["total_quantity"] += row["quantity"]
            entry["total_cost"] += row.get("cost") or 0
            supplied_at = parse_timestamp(row["supply_date"])
            if entry["last_supply_date"] is None or supplied_at > entry["last_supply_date"]:
                entry["last_supply_date"] = supplied_at
        for entry in stats.values():
            entry["average_quantity"] = entry["total_quantity"] / entry["total_supplies"]
        return {"dados": list(stats.values()), "period": period}
