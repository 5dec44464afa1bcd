"""
Service layer for the dashboard.

The dashboard is a read-only summary recomputed from the current rows on
every request; nothing is cached or stored.  Counting is done in Python
over the full tables since several figures group by values
(``type``, ``specialization``) that are not known in advance.

Two entry points exist:

* ``overview`` returns status counters, monthly fuel cost figures, the
  most recent activities and ready-to-plot chart series;
* ``alerts`` returns at most ten operational alerts, critical first.
"""

from __future__ import annotations

import logging
from collections import Counter
from datetime import timedelta
from typing import Any, Dict, List

from ..core.config import settings
from ..core.repository import parse_timestamp, utcnow
from .activity_service import ActivityService
from .checklist_service import ChecklistService
from .generator_service import GeneratorService
from .maintenance_service import MaintenanceService
from .pop_service import PopService
from .supply_service import SupplyService
from .technician_service import TechnicianService

logger = logging.getLogger(__name__)

#: Chart colours shared with the dashboard front end.
GREEN = "#10B981"
AMBER = "#F59E0B"
RED = "#EF4444"
BLUE = "#3B82F6"

MAX_ALERTS = 10
STALE_PENDING_DAYS = 7

_ALERT_ORDER = {"critical": 0, "warning": 1, "info": 2}


def _count_by(rows: List[Dict[str, Any]], column: str) -> Counter:
    return Counter(row.get(column) for row in rows)


def _breakdown(rows: List[Dict[str, Any]], column: str) -> Dict[str, int]:
    """Count rows per value of an optional column; rows without a value are skipped."""
    return {key: count for key, count in _count_by(rows, column).items() if key is not None}


class DashboardService:
    """Aggregations over all resources for the dashboard screen."""

    @classmethod
    async def overview(cls) -> Dict[str, Any]:
        """Return the dashboard summary.

        Supplies are restricted to the current UTC calendar month; a
        supply without a cost counts as zero.  ``recent_activities``
        holds the activities with the highest ids, newest first.
        """
        pops = await PopService.all_records()
        activities = await ActivityService.all_records()
        technicians = await TechnicianService.all_records()
        generators = await GeneratorService.all_records()
        supplies = await SupplyService.all_records()

        pop_status = _count_by(pops, "status")
        activity_status = _count_by(activities, "status")
        activity_priority = _count_by(activities, "priority")
        technician_status = _count_by(technicians, "status")
        generator_status = _count_by(generators, "status")

        now = utcnow()
        monthly = []
        for supply in supplies:
            supplied_at = parse_timestamp(supply.get("supply_date"))
            if supplied_at is None:
                continue
            supplied_at = supplied_at.astimezone(now.tzinfo)
            if supplied_at.year == now.year and supplied_at.month == now.month:
                monthly.append(supply)
        monthly_cost = sum(supply.get("cost") or 0 for supply in monthly)

        pops_stats = {
            "total": len(pops),
            "active": pop_status["active"],
            "maintenance": pop_status["maintenance"],
            "inactive": pop_status["inactive"],
        }
        activities_stats = {
            "total": len(activities),
            "pending": activity_status["pending"],
            "in_progress": activity_status["in_progress"],
            "completed": activity_status["completed"],
            "high_priority": activity_priority["high"],
            "medium_priority": activity_priority["medium"],
            "low_priority": activity_priority["low"],
        }
        recent = await ActivityService.recent(settings.recent_activities_limit)

        return {
            "pops": pops_stats,
            "activities": activities_stats,
            "technicians": {
                "total": len(technicians),
                "active": technician_status["active"],
                "vacation": technician_status["vacation"],
                "inactive": technician_status["inactive"],
            },
            "generators": {
                "total": len(generators),
                "operational": generator_status["operational"],
                "maintenance": generator_status["maintenance"],
                "inactive": generator_status["inactive"],
            },
            "supplies": {
                "total_this_month": len(monthly),
                "total_cost_this_month": monthly_cost,
                "average_cost": monthly_cost / len(monthly) if monthly else 0,
            },
            "activities_by_type": _breakdown(activities, "type"),
            "technicians_by_specialization": _breakdown(technicians, "specialization"),
            "recent_activities": [
                {
                    "id": row["id"],
                    "title": row["title"],
                    "status": row["status"],
                    "priority": row["priority"],
                    "type": row["type"],
                }
                for row in recent
            ],
            "charts": {
                "pops_status": [
                    {"name": "Active", "value": pops_stats["active"], "color": GREEN},
                    {"name": "Maintenance", "value": pops_stats["maintenance"], "color": AMBER},
                    {"name": "Inactive", "value": pops_stats["inactive"], "color": RED},
                ],
                "activities_status": [
                    {"name": "Pending", "value": activities_stats["pending"], "color": AMBER},
                    {"name": "In progress", "value": activities_stats["in_progress"], "color": BLUE},
                    {"name": "Completed", "value": activities_stats["completed"], "color": GREEN},
                ],
                "activities_priority": [
                    {"name": "High", "value": activities_stats["high_priority"], "color": RED},
                    {"name": "Medium", "value": activities_stats["medium_priority"], "color": AMBER},
                    {"name": "Low", "value": activities_stats["low_priority"], "color": GREEN},
                ],
            },
            "last_updated": now.isoformat(),
        }

    @classmethod
    async def alerts(cls) -> List[Dict[str, Any]]:
        """Return operational alerts, critical ones first, at most ten.

        * POPs under maintenance (warning);
        * generators under maintenance (warning) or inactive (critical);
        * activities still pending more than seven days after their
          scheduled date, or creation date when unscheduled (warning).
        """
        now = utcnow()
        timestamp = now.isoformat()
        alerts: List[Dict[str, Any]] = []

        for pop in await PopService.all_records({"status": "maintenance"}):
            alerts.append(
                {
                    "id": f"pop-maintenance-{pop['id']}",
                    "type": "warning",
                    "title": "POP under maintenance",
                    "message": f"POP {pop['name']} is under maintenance",
                    "timestamp": timestamp,
                    "data": {"pop_id": pop["id"], "pop_name": pop["name"]},
                }
            )

        for generator in await GeneratorService.all_records():
            if generator["status"] not in ("maintenance", "inactive"):
                continue
            alerts.append(
                {
                    "id": f"generator-issue-{generator['id']}",
                    "type": "critical" if generator["status"] == "inactive" else "warning",
                    "title": "Generator issue",
                    "message": f"Generator {generator['name']} is {generator['status']}",
                    "timestamp": timestamp,
                    "data": {"generator_id": generator["id"], "generator_model": generator["model"]},
                }
            )

        threshold = now - timedelta(days=STALE_PENDING_DAYS)
        for activity in await ActivityService.all_records({"status": "pending"}):
            since = parse_timestamp(activity.get("scheduled_date") or activity.get("created_at"))
            if since is None or since >= threshold:
                continue
            alerts.append(
                {
                    "id": f"old-activity-{activity['id']}",
                    "type": "warning",
                    "title": "Pending activity",
                    "message": (
                        f'Activity "{activity["title"]}" has been pending for more than '
                        f"{STALE_PENDING_DAYS} days"
                    ),
                    "timestamp": timestamp,
                    "data": {"activity_id": activity["id"], "title": activity["title"]},
                }
            )

        # Stable sort keeps the insertion order within each level.
        alerts.sort(key=lambda alert: _ALERT_ORDER[alert["type"]])
        logger.debug("Computed %s dashboard alerts", len(alerts))
        return alerts[:MAX_ALERTS]

    @classmethod
    async def record_counts(cls) -> Dict[str, int]:
        """Row count per resource, reported by the health check."""
        services = {
            "pops": PopService,
            "activities": ActivityService,
            "technicians": TechnicianService,
            "supplies": SupplyService,
            "generators": GeneratorService,
            "maintenances": MaintenanceService,
            "checklist_templates": ChecklistService,
        }
        return {name: service.repository.count() for name, service in services.items()}
