"""Liveness probe."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_class=PlainTextResponse)
def health():
    """Health check endpoint.

    Used by containers and orchestrators to see whether the API process is up
    and able to serve requests. It does not touch the store.

    Returns:
        str: The plain-text acknowledgement `OK`.
    """
    return "OK"
