"""Shared fixtures: test client with the upstream API replaced by a mock transport."""

import io

import httpx
import pytest
from fastapi.testclient import TestClient
from PIL import Image

from legit_proxy.main import app
from legit_proxy.api.routes import get_legit_client
from legit_proxy.services import LegitAppClient, UpstreamConfig
from tests.fake_upstream import BASE_URL, SECRET, FakeUpstream


@pytest.fixture
def upstream_config():
    """Configuration pointing at the fake upstream."""
    return UpstreamConfig(base_url=BASE_URL, secret_key=SECRET, timeout_seconds=5.0)


@pytest.fixture
def upstream():
    """Fresh fake upstream API."""
    return FakeUpstream()


@pytest.fixture
def legit_client(upstream, upstream_config):
    """Upstream client whose requests go to the FakeUpstream."""
    return LegitAppClient(upstream_config, transport=httpx.MockTransport(upstream))


@pytest.fixture
def client(legit_client):
    """Test client with the shared upstream client replaced."""
    app.dependency_overrides[get_legit_client] = lambda: legit_client
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sample_image_bytes():
    """Create a test image."""
    img = Image.new("RGB", (64, 48), color="white")
    buffer = io.BytesIO()
    img.save(buffer, format="JPEG")
    return buffer.getvalue()
