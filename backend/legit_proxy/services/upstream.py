"""Client for the Legit App authentication API."""

import logging
from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import quote

import httpx

from ..config import Settings
from .errors import UpstreamFailure, read_body

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpstreamConfig:
    """Base URL, bearer credential and timeout for every upstream call."""
    base_url: Optional[str]
    secret_key: Optional[str]
    timeout_seconds: Optional[float] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "UpstreamConfig":
        return cls(
            base_url=settings.legit_app_api_url,
            secret_key=settings.legit_app_developer_secret_key,
            timeout_seconds=settings.upstream_timeout_seconds,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url) and bool(self.secret_key)

    @property
    def auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.secret_key or ''}"}

    @property
    def json_headers(self) -> dict[str, str]:
        """Headers for JSON calls."""
        return {**self.auth_headers, "Content-Type": "application/json"}

    @property
    def multipart_headers(self) -> dict[str, str]:
        """Headers for multipart calls; httpx adds the boundary Content-Type."""
        return dict(self.auth_headers)


class LegitAppClient:
    """
    Thin async client issuing exactly one request per operation.

    One pooled httpx.AsyncClient is kept per instance; call ``aclose()`` on
    shutdown. Any non-2xx response, transport error or timeout is raised as
    UpstreamFailure. Successful calls return the decoded JSON body.
    """

    def __init__(self, config: UpstreamConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self._http = httpx.AsyncClient(
            base_url=config.base_url or "",
            timeout=httpx.Timeout(config.timeout_seconds),
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _send(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = await self._http.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise UpstreamFailure.from_response(e.response, str(e)) from e
        except httpx.HTTPError as e:
            logger.warning(f"Upstream {method} {path} failed without response: {e!r}")
            raise UpstreamFailure(str(e) or type(e).__name__) from e
        return read_body(response)

    async def get(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        """GET ``path``; parameters with a None value are not sent."""
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        return await self._send("GET", path, params=params or None, headers=self.config.json_headers)

    async def post_json(self, path: str, payload: Any) -> Any:
        return await self._send("POST", path, json=payload, headers=self.config.json_headers)

    async def upload_file(self, path: str, filename: str, content: bytes, content_type: str, field: str = "file") -> Any:
        """POST ``content`` as a single multipart form field."""
        return await self._send(
            "POST",
            path,
            files={field: (filename, content, content_type)},
            headers=self.config.multipart_headers,
        )

    # Legit App endpoints

    async def list_categories(self) -> Any:
        return await self.get("/product_category")

    async def list_brands(self, category_id: Optional[str]) -> Any:
        return await self.get("/product_brand", {"category_id": category_id})

    async def list_models(self, category_id: Optional[str], brand_id: Optional[str]) -> Any:
        return await self.get("/product_model", {"category_id": category_id, "brand_id": brand_id})

    async def list_authentication_sets(
        self,
        category_id: Optional[str],
        brand_id: Optional[str],
        model_id: Optional[str],
    ) -> Any:
        return await self.get(
            "/authentication_set",
            {"category_id": category_id, "brand_id": brand_id, "model_id": model_id},
        )

    async def upload_image(self, filename: str, content: bytes, content_type: str) -> Any:
        return await self.upload_file("/asset_image", filename, content, content_type)

    async def submit_authentication(self, payload: Any) -> Any:
        return await self.post_json("/authentication", payload)

    async def submit_additional_photos(self, authentication_id: str, payload: Any) -> Any:
        return await self.post_json(f"/authentication/{quote(authentication_id, safe='')}/photo", payload)
