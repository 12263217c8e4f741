"""Fault taxonomy and the FastAPI handlers that turn faults into responses.

The play store raises one of three faults; each carries its HTTP status and a
short message. Handlers render every fault as `{"detail": message}`, the same
body shape FastAPI uses for `HTTPException`, so clients only need to look at
the status code and `detail`.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class PlayFault(Exception):
    """Base class for faults surfaced to API callers."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFault(PlayFault):
    """Malformed or undecodable request input."""

    status_code = 400


class NotFoundFault(PlayFault):
    """A point lookup found no record."""

    status_code = 404


class InternalFault(PlayFault):
    """Serialization, store connectivity, or unexpected store error."""

    status_code = 500


def _fault_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": message})


async def handle_play_fault(request: Request, exc: PlayFault) -> JSONResponse:
    return _fault_response(exc.status_code, exc.message)


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Map FastAPI's request validation errors (422 by default) to 400.

    Malformed JSON and bodies that do not match the schema both arrive here.
    """
    errors = exc.errors()
    logger.info("Rejected request to %s: %s", request.url.path, errors)

    if any(err.get("loc", ())[:1] == ("body",) for err in errors):
        return _fault_response(ValidationFault.status_code, "Invalid request body")
    return _fault_response(ValidationFault.status_code, "Invalid request parameters")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PlayFault, handle_play_fault)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
