"""API routers and error handlers."""

from .routes import router
from .error_handlers import register_error_handlers

__all__ = ["router", "register_error_handlers"]
