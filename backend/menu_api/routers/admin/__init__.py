"""
Admin API router - combines the catalog sub-routers.

- categories: Category CRUD
- menu: Menu item CRUD

Every route requires a bearer token with the admin role.
All routes are prefixed with /api/admin
"""

from fastapi import APIRouter

from .categories import router as categories_router
from .menu import router as menu_router


router = APIRouter(prefix="/api/admin")

router.include_router(categories_router)
router.include_router(menu_router)


__all__ = ["router"]
