"""Services for the upstream Legit App client, error normalization and webhook dispatch."""

from .errors import UpstreamFailure, normalize_failure, read_body
from .upstream import UpstreamConfig, LegitAppClient
from .webhooks import WebhookEventType, dispatch_event

__all__ = [
    "UpstreamFailure",
    "normalize_failure",
    "read_body",
    "UpstreamConfig",
    "LegitAppClient",
    "WebhookEventType",
    "dispatch_event",
]
