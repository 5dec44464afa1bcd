"""
Business logic for activities.

Activities are the work orders shown on the dashboard.  Besides the
standard listing they feed the dashboard's recent activity list, which
is ordered by descending id rather than insertion order.
"""

from typing import Any, Dict, List, Optional

from ..core.repository import TableRepository
from ..schemas.activity import ActivityRead
from .base import ResourceService
from .listing import coerce_int


class ActivityService(ResourceService):
    repository = TableRepository("activities")
    read_schema = ActivityRead
    label = "Activity"
    search_fields = ("title", "description")
    non_nullable = frozenset({"title", "status", "priority"})

    @classmethod
    async def list_activities(
        cls,
        busca: Optional[str] = None,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        type: Optional[str] = None,
        pop_id: Any = None,
        page: Any = None,
        limit: Any = None,
    ) -> Dict[str, Any]:
        filters = {
            "status": status or None,
            "priority": priority or None,
            "type": type or None,
            "pop_id": coerce_int(pop_id),
        }
        return await cls.list_records(busca=busca, page=page, limit=limit, filters=filters)

    @classmethod
    async def recent(cls, count: int) -> List[Dict[str, Any]]:
        """Return the ``count`` activities with the highest ids, newest first."""
        rows = cls.repository.list()
        rows.sort(key=lambda row: row["id"], reverse=True)
        return rows[:count]
