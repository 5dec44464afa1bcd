"""
Filtering and pagination shared by all list endpoints.

Categorical filters (status, pop_id, ...) are pushed down to SQL as
exact matches by ``TableRepository.list``.  Free‑text search is done
here in Python: SQLite's ``LIKE``/``lower()`` only fold ASCII, and the
data is full of accented Portuguese names ("São Paulo", "Elétrica").
Pagination is then a slice over the filtered list, in insertion
order, the same way ``StatisticsService`` pages computed rows.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Iterable, List, Optional

from ..core.config import settings


def coerce_int(value: Any, default: Optional[int] = None, minimum: int = 1) -> Optional[int]:
    """Parse a query value as an int, falling back to ``default``.

    Blank, non‑numeric and values below ``minimum`` are all treated as
    absent.  Query parameters never produce a validation error.
    """
    if value is None:
        return default
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    if number < minimum:
        return default
    return number


def matches_search(record: Dict[str, Any], fields: Iterable[str], term: str) -> bool:
    """Case‑insensitive substring match of ``term`` across ``fields`` (OR)."""
    needle = term.casefold()
    for field in fields:
        value = record.get(field)
        if value is not None and needle in str(value).casefold():
            return True
    return False


def apply_search(
    records: List[Dict[str, Any]], fields: Iterable[str], term: Optional[str]
) -> List[Dict[str, Any]]:
    if not term:
        return records
    fields = tuple(fields)
    return [record for record in records if matches_search(record, fields, term)]


def paginate(items: List[Any], page: Any = None, limit: Any = None) -> Dict[str, Any]:
    """Slice ``items`` into a 1‑based page and attach page metadata.

    Returns the list envelope used by every list endpoint:
    ``{dados, total, pagina, limite, total_paginas}``.
    """
    page_number = coerce_int(page, 1)
    page_size = coerce_int(limit, settings.default_page_size)
    total = len(items)
    start = (page_number - 1) * page_size
    return {
        "dados": items[start : start + page_size],
        "total": total,
        "pagina": page_number,
        "limite": page_size,
        "total_paginas": math.ceil(total / page_size),
    }
