"""
Top‑level router for version 1 of the API.

Aggregates the domain routers under a unified prefix.
"""

from fastapi import APIRouter

from .endpoints import events, users

router = APIRouter()

router.include_router(events.router, prefix="/events", tags=["events"])
router.include_router(users.router, prefix="/users", tags=["users"])
