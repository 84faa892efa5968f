"""
Authentication endpoints under /api/admin.
"""

from .routes import router

__all__ = ["router"]
