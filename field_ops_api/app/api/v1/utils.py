"""
Helpers shared by the v1 endpoint modules.

``parse_record_id`` implements the query-string id contract and
``http_error`` translates service exceptions into ``HTTPException``.
"""

from typing import Optional, Type

from fastapi import HTTPException, status

from ...core.errors import ConflictError, NotFoundError
from ...services.base import ResourceService


def parse_record_id(raw: Optional[str], service: Type[ResourceService]) -> int:
    """Return the ``id`` query parameter as an int.

    A missing or blank id is a client error (400); an id that is not an
    integer cannot name any record and is reported as not found (404).
    """
    if raw is None or not raw.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="ID is required")
    try:
        return int(raw.strip())
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"{service.label} {raw} not found"
        )


def http_error(exc: ValueError) -> HTTPException:
    """Map a service exception onto the matching HTTP status."""
    if isinstance(exc, NotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, ConflictError):
        code = status.HTTP_409_CONFLICT
    else:
        code = status.HTTP_400_BAD_REQUEST
    return HTTPException(status_code=code, detail=str(exc))
