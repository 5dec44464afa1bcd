"""
Business logic for checklist templates.

Filled checklists inside maintenance records keep the item ids of the
template they were created from.  That link is what ``usage`` reports
and what prevents deleting a template that is still referenced.
"""

import time
from typing import Any, Dict, List, Optional

from ..core.errors import ConflictError
from ..core.repository import TableRepository
from ..schemas.checklist import ChecklistTemplateRead
from .base import ResourceService
from .maintenance_service import MaintenanceService


def _parse_bool(value: Optional[str]) -> Optional[bool]:
    if value is None:
        return None
    lowered = value.strip().lower()
    if lowered in {"true", "1", "yes"}:
        return True
    if lowered in {"false", "0", "no"}:
        return False
    return None


class ChecklistService(ResourceService):
    repository = TableRepository("checklist_templates", json_columns=("items",), bool_columns=("active",))
    read_schema = ChecklistTemplateRead
    label = "Checklist template"
    search_fields = ("name", "description", "category")
    non_nullable = frozenset({"name", "description", "items", "active"})

    @classmethod
    async def list_templates(
        cls,
        busca: Optional[str] = None,
        active: Optional[str] = None,
        category: Optional[str] = None,
        page: Any = None,
        limit: Any = None,
    ) -> Dict[str, Any]:
        filters = {"active": _parse_bool(active), "category": category or None}
        return await cls.list_records(busca=busca, page=page, limit=limit, filters=filters)

    @classmethod
    async def duplicate(cls, template_id: int, name: Optional[str] = None) -> ChecklistTemplateRead:
        """Copy a template under a new name.

        Item ids get a ``_copy_<millis>`` suffix so that checklists filled
        from the copy are not attributed to the original.
        """
        source = await cls.get_record(template_id)
        suffix = f"_copy_{int(time.time() * 1000)}"
        items = [
            {**item.model_dump(), "id": f"{item.id}{suffix}"}
            for item in source.items
        ]
        row = cls.repository.insert(
            {
                "name": name or f"{source.name} (Copy)",
                "description": source.description,
                "category": source.category,
                "items": items,
                "active": source.active,
            }
        )
        return ChecklistTemplateRead.model_validate(row)

    @classmethod
    async def _maintenances_using(cls, template: ChecklistTemplateRead) -> List[Dict[str, Any]]:
        item_ids = {item.id for item in template.items}
        using = []
        for row in await MaintenanceService.all_records():
            if any(entry.get("id") in item_ids for entry in row["checklist"] if isinstance(entry, dict)):
                using.append(row)
        return using

    @classmethod
    async def usage(cls, template_id: int) -> Dict[str, Any]:
        template = await cls.get_record(template_id)
        using = await cls._maintenances_using(template)
        return {
            "template_id": template.id,
            "template_name": template.name,
            "usage_count": len(using),
            "used_in_maintenances": [
                {
                    "id": row["id"],
                    "title": row["title"],
                    "status": row["status"],
                    "scheduled_date": row["scheduled_date"],
                }
                for row in using
            ],
        }

    @classmethod
    async def delete_record(cls, record_id: Optional[int]) -> None:
        template = await cls.get_record(record_id)
        if await cls._maintenances_using(template):
            raise ConflictError("Template is in use by maintenance records")
        await super().delete_record(record_id)
