"""
Exceptions raised by the service layer.

Services never build HTTP responses themselves; they raise one of the
exceptions below and the endpoint translates it into an
``HTTPException`` with the matching status code.  All of them derive
from ``ValueError`` so that callers outside the HTTP layer can catch
them generically.
"""


class NotFoundError(ValueError):
    """The requested record does not exist (HTTP 404)."""


class ConflictError(ValueError):
    """A uniqueness rule or an in-use check was violated (HTTP 409)."""


class InvalidRequestError(ValueError):
    """The payload passed schema validation but is still unusable (HTTP 400)."""
