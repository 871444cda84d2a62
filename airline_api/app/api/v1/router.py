"""
Top‑level router for version 1 of the API.

This router aggregates the endpoint routers.  When new endpoints are
added, update this file to include their routers.
"""

from fastapi import APIRouter

from .endpoints import catalog, controller

router = APIRouter()

router.include_router(controller.router, tags=["controller"])
router.include_router(catalog.router, tags=["catalog"])
