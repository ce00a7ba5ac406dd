"""API route definitions."""

from functools import lru_cache
from typing import Any, Optional
import logging

from fastapi import APIRouter, Body, Depends, Query, Request
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile

from ..models import (
    AuthenticationRequest,
    AdditionalPhotosRequest,
    WebhookEvent,
    WebhookAck,
    UploadImageResponse,
    UploadErrorResponse,
    ErrorEnvelope,
    HealthResponse,
    json_request_body,
)
from ..services import (
    LegitAppClient,
    UpstreamConfig,
    UpstreamFailure,
    normalize_failure,
    dispatch_event,
)
from ..config import get_settings
from .. import __version__

logger = logging.getLogger(__name__)
router = APIRouter()

ERROR_RESPONSES = {
    500: {"model": ErrorEnvelope, "description": "Upstream or local failure (status mirrors upstream when available)"},
}

UPLOAD_REQUEST_BODY = {
    "requestBody": {
        "content": {
            "multipart/form-data": {
                "schema": {
                    "type": "object",
                    "properties": {"image": {"type": "string", "format": "binary"}},
                }
            }
        }
    }
}


@lru_cache
def get_upstream_config() -> UpstreamConfig:
    """Upstream configuration, built once per process."""
    return UpstreamConfig.from_settings(get_settings())


@lru_cache
def get_legit_client() -> LegitAppClient:
    """Shared upstream client, built once per process."""
    return LegitAppClient(get_upstream_config())


def failure_response(exc: Exception, fallback_message: str, route: str) -> JSONResponse:
    """Convert any exception raised while handling ``route`` into the error envelope."""
    failure = UpstreamFailure.from_exception(exc)
    status_code, envelope = normalize_failure(failure, fallback_message)
    if failure.status is None and not isinstance(exc, UpstreamFailure):
        logger.exception(f"{route} failed locally: {exc}")
    else:
        logger.warning(f"{route} failed with status {status_code}: {envelope.message}")
    return JSONResponse(status_code=status_code, content=envelope.model_dump(mode="json"))


@router.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check(config: UpstreamConfig = Depends(get_upstream_config)):
    """Check API health and whether the upstream API is configured."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        upstream_configured=config.is_configured,
    )


@router.get("/categories", responses=ERROR_RESPONSES, tags=["Catalog"])
async def list_categories(client: LegitAppClient = Depends(get_legit_client)):
    """List product categories."""
    try:
        return await client.list_categories()
    except Exception as e:
        return failure_response(e, "Failed to fetch categories", "/categories")


@router.get("/brands", responses=ERROR_RESPONSES, tags=["Catalog"])
async def list_brands(
    category_id: Optional[str] = Query(None, alias="categoryId"),
    client: LegitAppClient = Depends(get_legit_client),
):
    """List brands of a category."""
    try:
        return await client.list_brands(category_id)
    except Exception as e:
        return failure_response(e, "Failed to fetch brands", "/brands")


@router.get("/models", responses=ERROR_RESPONSES, tags=["Catalog"])
async def list_models(
    category_id: Optional[str] = Query(None, alias="categoryId"),
    brand_id: Optional[str] = Query(None, alias="brandId"),
    client: LegitAppClient = Depends(get_legit_client),
):
    """List models of a brand within a category."""
    try:
        return await client.list_models(category_id, brand_id)
    except Exception as e:
        return failure_response(e, "Failed to fetch models", "/models")


@router.get("/authentication_sets", responses=ERROR_RESPONSES, tags=["Catalog"])
async def list_authentication_sets(
    category_id: Optional[str] = Query(None, alias="categoryId"),
    brand_id: Optional[str] = Query(None, alias="brandId"),
    model_id: Optional[str] = Query(None, alias="modelId"),
    client: LegitAppClient = Depends(get_legit_client),
):
    """List the photo sets required to authenticate a model."""
    try:
        return await client.list_authentication_sets(category_id, brand_id, model_id)
    except Exception as e:
        return failure_response(e, "Failed to fetch authentication sets", "/authentication_sets")


@router.post(
    "/upload-image",
    response_model=UploadImageResponse,
    responses={
        400: {"model": UploadErrorResponse, "description": "No file in request"},
        **ERROR_RESPONSES,
    },
    openapi_extra=UPLOAD_REQUEST_BODY,
    tags=["Authentication"],
)
async def upload_image(
    request: Request,
    client: LegitAppClient = Depends(get_legit_client),
):
    """
    Relay an image to the upstream asset store.

    The multipart field ``image`` is re-sent as field ``file``; the returned
    ``url`` is echoed back as ``image_url``. Anything other than a file in
    ``image`` counts as no file.
    """
    async with request.form() as form:
        image = form.get("image")
        if not isinstance(image, UploadFile):
            return JSONResponse(status_code=400, content={"error": "No image file provided"})

        try:
            content = await image.read()
            uploaded = await client.upload_image(
                image.filename or "upload",
                content,
                image.content_type or "application/octet-stream",
            )
            logger.info(f"Uploaded {image.filename} ({len(content)} bytes)")
            url = uploaded.get("url") if isinstance(uploaded, dict) else None
            return UploadImageResponse(image_url=url)
        except Exception as e:
            return failure_response(e, "Failed to upload image", "/upload-image")


@router.post(
    "/submit-authentication",
    responses=ERROR_RESPONSES,
    openapi_extra=json_request_body(AuthenticationRequest),
    tags=["Authentication"],
)
async def submit_authentication(
    payload: Any = Body(None),
    client: LegitAppClient = Depends(get_legit_client),
):
    """Create an authentication request upstream; the body is forwarded as sent."""
    try:
        return await client.submit_authentication(payload if payload is not None else {})
    except Exception as e:
        return failure_response(e, "Failed to submit authentication request", "/submit-authentication")


@router.post(
    "/submit-additional-photos-for-authentication/{authentication_id}",
    responses=ERROR_RESPONSES,
    openapi_extra=json_request_body(AdditionalPhotosRequest),
    tags=["Authentication"],
)
async def submit_additional_photos(
    authentication_id: str,
    payload: Any = Body(None),
    client: LegitAppClient = Depends(get_legit_client),
):
    """Add photos to an existing authentication; the body is forwarded as sent."""
    try:
        return await client.submit_additional_photos(
            authentication_id, payload if payload is not None else {}
        )
    except Exception as e:
        return failure_response(
            e,
            "Failed to submit additional photos for authentication",
            "/submit-additional-photos-for-authentication",
        )


@router.post(
    "/webhook",
    response_model=WebhookAck,
    response_model_exclude_unset=True,
    openapi_extra=json_request_body(WebhookEvent),
    tags=["Webhook"],
)
async def receive_webhook(event: Any = Body(None)):
    """
    Acknowledge an upstream webhook event.

    Any JSON body is acknowledged. ``type`` is echoed unchanged, and omitted
    from the response when the body is not an object or has no ``type``.
    """
    try:
        if isinstance(event, dict):
            dispatch_event(event.get("type"), event.get("data"))
            if "type" in event:
                return WebhookAck(received=True, event_type=event["type"])
        else:
            dispatch_event(None, event)
        return WebhookAck(received=True)
    except Exception as e:
        return failure_response(e, "Webhook error", "/webhook")
