"""
Business logic for maintenance records.

Workflow on top of plain CRUD:

* the filled checklist can be replaced on its own
  (``update_checklist``), which is what the checklist executor does
  while a technician works through the items;
* ``complete`` closes a record once: it sets the completion date,
  optionally replaces the notes and appends the final photos;
* ``upcoming`` lists open records scheduled within the next N days.
"""

import logging
from datetime import timedelta
from typing import Any, Dict, List, Optional

from ..core.errors import InvalidRequestError
from ..core.repository import TableRepository, parse_timestamp, utcnow
from ..schemas.maintenance import MaintenanceCompletion, MaintenanceRead
from .base import ResourceService
from .listing import coerce_int

logger = logging.getLogger(__name__)

DEFAULT_UPCOMING_DAYS = 30


class MaintenanceService(ResourceService):
    repository = TableRepository("maintenances", json_columns=("checklist", "photo_urls"))
    read_schema = MaintenanceRead
    label = "Maintenance"
    search_fields = ("title", "asset_name", "notes")
    non_nullable = frozenset(
        {
            "title",
            "asset_type",
            "asset_id",
            "technician_id",
            "asset_name",
            "status",
            "frequency",
            "checklist",
            "notes",
            "photo_urls",
        }
    )

    @classmethod
    def _prepare_create(cls, values: Dict[str, Any]) -> Dict[str, Any]:
        if values.get("scheduled_date") is None:
            values["scheduled_date"] = utcnow()
        return values

    @classmethod
    async def list_maintenances(
        cls,
        busca: Optional[str] = None,
        status: Optional[str] = None,
        asset_type: Optional[str] = None,
        asset_id: Any = None,
        technician_id: Any = None,
        page: Any = None,
        limit: Any = None,
    ) -> Dict[str, Any]:
        filters = {
            "status": status or None,
            "asset_type": asset_type or None,
            "asset_id": coerce_int(asset_id),
            "technician_id": coerce_int(technician_id),
        }
        return await cls.list_records(busca=busca, page=page, limit=limit, filters=filters)

    @classmethod
    async def for_asset(cls, asset_type: str, asset_id: int) -> List[MaintenanceRead]:
        rows = cls.repository.list({"asset_type": asset_type, "asset_id": asset_id})
        return [MaintenanceRead.model_validate(row) for row in rows]

    @classmethod
    async def update_checklist(cls, maintenance_id: int, checklist: List[Dict[str, Any]]) -> MaintenanceRead:
        """Replace the filled checklist of a maintenance record."""
        return await cls.update_record(maintenance_id, {"checklist": checklist})

    @classmethod
    async def complete(cls, maintenance_id: int, completion: MaintenanceCompletion) -> MaintenanceRead:
        """Mark a maintenance record as completed.

        Raises
        ------
        NotFoundError
            If the record does not exist.
        InvalidRequestError
            If the record is already completed.
        """
        current = await cls.get_record(maintenance_id)
        if current.status == "completed":
            raise InvalidRequestError("Maintenance already completed")
        updates = {
            "status": "completed",
            "completed_date": utcnow(),
            "notes": completion.final_notes or current.notes,
            "photo_urls": list(current.photo_urls) + list(completion.final_photos),
        }
        logger.info("Completing maintenance %s", maintenance_id)
        return await cls.update_record(maintenance_id, updates)

    @classmethod
    async def upcoming(cls, days: Any = None) -> Dict[str, Any]:
        """Open records scheduled between now and now + ``days``.

        ``days`` is coerced leniently and defaults to 30; ``0`` is a
        valid zero-day window.  Results are ordered by
        ``scheduled_date`` ascending.
        """
        days_ahead = coerce_int(days, DEFAULT_UPCOMING_DAYS, minimum=0)
        start = utcnow()
        end = start + timedelta(days=days_ahead)
        selected = []
        for row in cls.repository.list():
            if row["status"] == "completed":
                continue
            scheduled = parse_timestamp(row["scheduled_date"])
            if scheduled is not None and start <= scheduled <= end:
                selected.append((scheduled, row))
        selected.sort(key=lambda pair: pair[0])
        return {
            "dados": [MaintenanceRead.model_validate(row) for _, row in selected],
            "total": len(selected),
            "period": {"from": start, "to": end, "days": days_ahead},
        }
