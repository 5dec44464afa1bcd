"""
Top‑level package for the Field Operations API.

Makes ``field_ops_api`` importable so that modules within ``app`` can
be referenced by fully qualified names such as
``field_ops_api.app.main``.  All functionality lives in submodules
under ``app``.
"""

__all__ = []
