"""Dispatch of inbound Legit App webhook events."""

import logging
from enum import Enum
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class WebhookEventType(str, Enum):
    """Event kinds sent by the Legit App API."""
    EXTRA_PHOTO = "authentication.extra_photo"
    NEW_MESSAGE = "authentication.new_message"
    COMPLETED = "authentication.completed"

    @classmethod
    def parse(cls, value: Any) -> Optional["WebhookEventType"]:
        """Return the matching kind, or None for unknown or missing tags."""
        try:
            return cls(value)
        except ValueError:
            return None


def handle_extra_photo(data: Any) -> None:
    logger.info("Received authentication extra photo event")


def handle_new_message(data: Any) -> None:
    logger.info("Received authentication new message event")


def handle_completed(data: Any) -> None:
    logger.info("Received authentication completed event")


def handle_unknown(event_type: Any, data: Any) -> None:
    logger.info(f"Unhandled event type {event_type}")


EVENT_HANDLERS: dict[WebhookEventType, Callable[[Any], None]] = {
    WebhookEventType.EXTRA_PHOTO: handle_extra_photo,
    WebhookEventType.NEW_MESSAGE: handle_new_message,
    WebhookEventType.COMPLETED: handle_completed,
}


def dispatch_event(event_type: Any, data: Any) -> Optional[WebhookEventType]:
    """
    Route an event to its handler.

    Unknown kinds are accepted and only logged; nothing here raises for an
    unexpected tag.

    Returns:
        The recognized event kind, or None when the tag was not recognized.
    """
    kind = WebhookEventType.parse(event_type)
    if kind is None:
        handle_unknown(event_type, data)
    else:
        EVENT_HANDLERS[kind](data)
    return kind
