"""
Top‑level API router.

Aggregates the domain routers under a single router which the
application mounts at ``/api``.
"""

from fastapi import APIRouter

from .endpoints import date_options, subscriptions

router = APIRouter()

router.include_router(date_options.router, prefix="/date-options", tags=["date-options"])
router.include_router(subscriptions.router, prefix="/subscriptions", tags=["subscriptions"])
