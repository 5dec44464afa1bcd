"""
Top-level router for version 1 of the API.

This router aggregates the resource routers under a unified prefix.
When new resources are added, update this file to include their
routers.
"""

from fastapi import APIRouter

from .endpoints import (
    activities,
    checklists,
    dashboard,
    generators,
    maintenance,
    pops,
    supplies,
    technicians,
)

router = APIRouter()

router.include_router(pops.router, prefix="/pops", tags=["pops"])
router.include_router(activities.router, prefix="/activities", tags=["activities"])
router.include_router(technicians.router, prefix="/technicians", tags=["technicians"])
router.include_router(supplies.router, prefix="/supplies", tags=["supplies"])
router.include_router(generators.router, prefix="/generators", tags=["generators"])
# Singular, as used by the dashboard front end.
router.include_router(maintenance.router, prefix="/maintenance", tags=["maintenance"])
router.include_router(checklists.router, prefix="/checklists", tags=["checklists"])
router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
