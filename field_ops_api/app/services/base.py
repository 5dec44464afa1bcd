"""
Common CRUD behaviour for the resource services.

All resources follow the same shallow pattern: filter and paginate,
validate a few required fields, enforce an ad hoc uniqueness rule,
stamp timestamps and return the stored record.  ``ResourceService``
implements that pattern once; the concrete services only declare
their table, search fields, uniqueness rules and read schema, and add
the operations that are specific to them.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, FrozenSet, List, Optional, Type

from pydantic import BaseModel

from ..core.errors import ConflictError, InvalidRequestError, NotFoundError
from ..core.repository import TableRepository
from .listing import apply_search, paginate

logger = logging.getLogger(__name__)


class ResourceService:
    """Base class; subclasses set the class attributes below."""

    repository: TableRepository
    read_schema: Type[BaseModel]
    #: Human readable name used in error messages, e.g. ``"POP"``.
    label: str = "Record"
    #: Fields searched by the ``busca`` query parameter.
    search_fields: tuple = ()
    #: Column -> conflict message for fields that must be unique.
    unique_fields: Dict[str, str] = {}
    #: Columns that may not be set to null by an update.
    non_nullable: FrozenSet[str] = frozenset()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @classmethod
    def _not_found(cls, record_id: Any) -> NotFoundError:
        return NotFoundError(f"{cls.label} {record_id} not found")

    @classmethod
    def _check_unique(cls, values: Dict[str, Any], exclude_id: Optional[int] = None) -> None:
        for column, message in cls.unique_fields.items():
            value = values.get(column)
            if value is None:
                continue
            existing = cls.repository.find_by(column, value)
            if existing and existing["id"] != exclude_id:
                raise ConflictError(message)

    @classmethod
    def _prepare_create(cls, values: Dict[str, Any]) -> Dict[str, Any]:
        """Hook for defaults that depend on the current time etc."""
        return values

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    @classmethod
    async def list_records(
        cls,
        busca: Optional[str] = None,
        page: Any = None,
        limit: Any = None,
        filters: Optional[Dict[str, Any]] = None,
        predicate: Optional[Callable[[Dict[str, Any]], bool]] = None,
    ) -> Dict[str, Any]:
        """Return one page of records.

        ``filters`` are exact matches (``None`` values are skipped),
        ``busca`` is a case‑insensitive substring search over
        ``search_fields`` and ``predicate`` is an optional extra filter
        for rules that are neither.
        """
        rows = cls.repository.list(filters)
        rows = apply_search(rows, cls.search_fields, busca)
        if predicate is not None:
            rows = [row for row in rows if predicate(row)]
        result = paginate(rows, page, limit)
        result["dados"] = [cls.read_schema.model_validate(row) for row in result["dados"]]
        return result

    @classmethod
    async def get_record(cls, record_id: Optional[int]) -> BaseModel:
        row = cls.repository.get(record_id) if record_id is not None else None
        if row is None:
            raise cls._not_found(record_id)
        return cls.read_schema.model_validate(row)

    @classmethod
    async def create_record(cls, data: BaseModel) -> BaseModel:
        values = cls._prepare_create(data.model_dump())
        cls._check_unique(values)
        row = cls.repository.insert(values)
        logger.info("Created %s %s", cls.label, row["id"])
        return cls.read_schema.model_validate(row)

    @classmethod
    async def update_record(cls, record_id: Optional[int], updates: Dict[str, Any]) -> BaseModel:
        """Shallow‑merge ``updates`` into an existing record.

        Fields missing from ``updates`` are preserved.  Raises
        ``NotFoundError`` for an unknown id, ``InvalidRequestError`` when
        a mandatory field is nulled and ``ConflictError`` when a unique
        field collides with another record.
        """
        existing = cls.repository.get(record_id) if record_id is not None else None
        if existing is None:
            raise cls._not_found(record_id)
        nulled = sorted(k for k, v in updates.items() if v is None and k in cls.non_nullable)
        if nulled:
            raise InvalidRequestError(f"Fields cannot be null: {', '.join(nulled)}")
        changed = {k: v for k, v in updates.items() if existing.get(k) != v}
        cls._check_unique(changed, exclude_id=existing["id"])
        row = cls.repository.update(existing["id"], updates)
        if row is None:
            # Deleted between the read and the write.
            raise cls._not_found(record_id)
        logger.info("Updated %s %s (%s)", cls.label, record_id, ", ".join(updates) or "no fields")
        return cls.read_schema.model_validate(row)

    @classmethod
    async def delete_record(cls, record_id: Optional[int]) -> None:
        if record_id is None or not cls.repository.delete(record_id):
            raise cls._not_found(record_id)
        logger.info("Deleted %s %s", cls.label, record_id)

    @classmethod
    async def all_records(cls, filters: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        """Unpaginated rows as plain dictionaries (for aggregations)."""
        return cls.repository.list(filters)
