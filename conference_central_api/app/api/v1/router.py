"""
Top‑level router for version 1 of the API.

This router aggregates the domain routers under a unified prefix.
The profile and conference routers define their own paths, matching
the method names clients already use (``/profile``, ``/conference``,
``/queryConferences``, ``/getConferencesCreated``).
"""

from fastapi import APIRouter

from .endpoints import conferences, profiles

router = APIRouter()

router.include_router(profiles.router, tags=["profiles"])
router.include_router(conferences.router, tags=["conferences"])
