"""API route aggregation.

All routers registered here get mounted in main.py. There is no
router-level auth: the operations endpoint runs every request through
the auth guard itself, because public and private operations share it.
"""

from fastapi import APIRouter

from castline.api.health import router as health_router
from castline.api.operations import router as operations_router

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(health_router, tags=["health"])
api_router.include_router(operations_router, tags=["operations"])
