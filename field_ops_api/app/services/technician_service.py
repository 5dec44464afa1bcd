"""
Business logic for technicians.

E‑mail addresses are unique across technicians.  The ``especialidade``
filter is a case‑insensitive substring match on ``specialization``.
A technician's work list is made of the activities assigned to them.
"""

from typing import Any, Dict, Optional

from ..core.repository import TableRepository
from ..schemas.technician import TechnicianRead
from .activity_service import ActivityService
from .base import ResourceService
from .listing import coerce_int


class TechnicianService(ResourceService):
    repository = TableRepository("technicians")
    read_schema = TechnicianRead
    label = "Technician"
    search_fields = ("name", "email", "specialization")
    unique_fields = {"email": "Email already in use"}
    non_nullable = frozenset({"name", "email", "status", "access_level"})

    @classmethod
    async def list_technicians(
        cls,
        busca: Optional[str] = None,
        status: Optional[str] = None,
        especialidade: Optional[str] = None,
        pop_id: Any = None,
        page: Any = None,
        limit: Any = None,
    ) -> Dict[str, Any]:
        predicate = None
        if especialidade:
            needle = especialidade.casefold()

            def predicate(row: Dict[str, Any]) -> bool:
                return needle in (row.get("specialization") or "").casefold()

        return await cls.list_records(
            busca=busca,
            page=page,
            limit=limit,
            filters={"status": status or None, "pop_id": coerce_int(pop_id)},
            predicate=predicate,
        )

    @classmethod
    async def activities(
        cls,
        technician_id: int,
        status: Optional[str] = None,
        page: Any = None,
        limit: Any = None,
    ) -> Dict[str, Any]:
        """One page of the activities assigned to a technician.

        Raises ``NotFoundError`` for an unknown technician.
        """
        await cls.get_record(technician_id)
        return await ActivityService.list_records(
            page=page,
            limit=limit,
            filters={"assigned_to": technician_id, "status": status or None},
        )
