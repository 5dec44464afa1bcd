"""
Application package initializer.

The backend is split by resource: every resource (POPs, activities,
technicians, supplies, generators, maintenance records and checklist
templates) has a Pydantic schema module under ``schemas``, a service
under ``services`` and a router under ``api/v1/endpoints``.  Shared
plumbing (configuration, logging, SQLite access and the generic table
repository) lives in ``core``.
"""

from .main import app  # noqa: F401
