"""
Business logic for POPs.

POP codes are unique; both creation and a code change through an
update are rejected with ``ConflictError`` when the code is taken.
"""

from typing import Any, Dict, Optional

from ..core.repository import TableRepository
from ..schemas.pop import PopRead
from .base import ResourceService


class PopService(ResourceService):
    repository = TableRepository("pops")
    read_schema = PopRead
    label = "POP"
    search_fields = ("name", "code", "address")
    unique_fields = {"code": "POP code already exists"}
    non_nullable = frozenset({"name", "code", "status"})

    @classmethod
    async def list_pops(
        cls,
        busca: Optional[str] = None,
        status: Optional[str] = None,
        page: Any = None,
        limit: Any = None,
    ) -> Dict[str, Any]:
        return await cls.list_records(
            busca=busca, page=page, limit=limit, filters={"status": status or None}
        )
