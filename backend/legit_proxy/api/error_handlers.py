"""Global exception handlers.

Malformed request bodies and parameters are reported in the same
``{message, details}`` envelope the routes use for upstream failures.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..models import ErrorEnvelope

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register global error handlers on the FastAPI app."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Validation error on {request.url.path}: {exc.errors()}")
        envelope = ErrorEnvelope(
            message="Invalid request",
            details=jsonable_encoder(exc.errors()),
        )
        return JSONResponse(
            status_code=422,
            content=envelope.model_dump(mode="json"),
        )
