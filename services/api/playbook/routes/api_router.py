"""Mounts the play and health routes under the `/api` prefix.

`create_app` includes this one router; individual route modules never carry
the prefix themselves.
"""

from fastapi import APIRouter

from .health import router as health_router
from .plays import router as plays_router

router = APIRouter(prefix="/api")

router.include_router(plays_router)
router.include_router(health_router)
