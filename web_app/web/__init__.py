"""Browser-facing routes (redirects)."""

from .routes import router as web_router

__all__ = ["web_router"]
