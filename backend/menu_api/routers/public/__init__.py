"""
Public routers - No authentication required.
- /api/menu/* - Public menu endpoints
- /api/health - Health check
"""

from .health import router as health_router
from .menu import router as menu_router

__all__ = ["menu_router", "health_router"]
