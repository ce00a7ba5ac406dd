"""Pydantic schemas for API requests and responses.

Request models document the upstream API's body shapes. Inbound bodies are
not validated against them; the upstream API decides what is valid.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Optional


class Image(BaseModel):
    """Image reference attached to an authentication."""
    model_config = ConfigDict(extra="allow")

    image_url: str
    source: Optional[str] = None
    publishable: Optional[bool] = None
    system_image_remark: Optional[str] = None
    user_image_remark: Optional[str] = None


class AuthenticationRequest(BaseModel):
    """Request body for submitting an authentication."""
    brand_id: int
    category_id: int
    model_id: int
    product_sku: Optional[str] = None
    product_sku_id: Optional[int] = None
    service_level_id: int
    service_extra_service_ids: Optional[list[int]] = None
    images: list[Image]
    product_source_type: Optional[str] = None
    product_source_remark: Optional[str] = None
    product_source_currency: Optional[str] = None
    product_source_price: Optional[str] = None
    user_custom_code: Optional[str] = None
    user_remark: Optional[str] = None
    certificate_owner_name: Optional[str] = None

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "example": {
                "brand_id": 1,
                "category_id": 1,
                "model_id": 10,
                "service_level_id": 2,
                "images": [
                    {"image_url": "https://cdn.example.com/front.jpg", "publishable": True},
                ],
                "user_remark": "Bought second hand",
            }
        },
    )


class AdditionalPhotosRequest(BaseModel):
    """Request body for adding photos to an existing authentication."""
    images: list[Image]
    user_remark: Optional[str] = None


class WebhookEvent(BaseModel):
    """Inbound webhook notification from the upstream API."""
    type: Any = None
    data: Any = None


class WebhookAck(BaseModel):
    """Acknowledgement returned for every webhook event."""
    received: bool = True
    event_type: Any = None


class UploadImageResponse(BaseModel):
    """Uploaded image location."""
    image_url: Any = None


class ErrorEnvelope(BaseModel):
    """Standard error response."""
    message: Any
    details: Any = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "message": "Invalid brand_id",
                "details": {"message": "Invalid brand_id", "code": 40001},
            }
        }
    )


class UploadErrorResponse(BaseModel):
    """Error returned when an upload request carries no file."""
    error: str = Field(..., examples=["No image file provided"])


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    upstream_configured: bool


def json_request_body(model: type[BaseModel]) -> dict[str, Any]:
    """OpenAPI ``requestBody`` documenting ``model`` without validating against it.

    Nested ``$defs`` are inlined so the schema stands alone inside the
    operation.
    """
    schema = model.model_json_schema()
    defs = schema.pop("$defs", {})

    def resolve(node):
        if isinstance(node, dict):
            ref = node.get("$ref")
            if isinstance(ref, str) and ref.startswith("#/$defs/"):
                return resolve(defs[ref.rsplit("/", 1)[-1]])
            return {key: resolve(value) for key, value in node.items()}
        if isinstance(node, list):
            return [resolve(item) for item in node]
        return node

    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": resolve(schema)}},
        }
    }
