"""Pydantic models for request/response schemas."""

from .schemas import (
    Image,
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

__all__ = [
    "Image",
    "AuthenticationRequest",
    "AdditionalPhotosRequest",
    "WebhookEvent",
    "WebhookAck",
    "UploadImageResponse",
    "UploadErrorResponse",
    "ErrorEnvelope",
    "HealthResponse",
    "json_request_body",
]
