"""
Public menu endpoints. No authentication.

Only available items are ever returned here; hidden items answer 404.
"""

from fastapi import APIRouter, Depends

from menu_api.routers.dependencies import get_category_service, get_menu_item_service
from menu_api.services.domain import CategoryService, MenuItemService
from shared.utils.admin_schemas import CategoryOutput, MenuItemOutput, MenuStructure


router = APIRouter(prefix="/api/menu", tags=["public-menu"])


@router.get("", response_model=list[MenuItemOutput])
def list_menu(
    category_id: int | None = None,
    category: str | None = None,
    available: bool = True,
    service: MenuItemService = Depends(get_menu_item_service),
) -> list[MenuItemOutput]:
    """
    Available menu items ordered by name.

    ``category`` matches the category name case-insensitively. Hidden items
    are never listed, so ``available=false`` yields an empty list.
    """
    if not available:
        return []
    return service.list_menu_items(
        category_id=category_id,
        category_name=category,
        available=True,
    )


# Static paths are registered before /{item_id}
@router.get("/categories", response_model=list[CategoryOutput])
def list_categories(
    service: CategoryService = Depends(get_category_service),
) -> list[CategoryOutput]:
    return service.list_categories()


@router.get("/structure", response_model=MenuStructure)
def menu_structure(
    service: CategoryService = Depends(get_category_service),
) -> MenuStructure:
    """Category names per group in display order."""
    return MenuStructure(**service.menu_structure())


@router.get("/category/{category_id}", response_model=list[MenuItemOutput])
def list_menu_by_category(
    category_id: int,
    service: MenuItemService = Depends(get_menu_item_service),
) -> list[MenuItemOutput]:
    return service.get_menu_items_by_category(category_id, available=True)


@router.get("/{item_id}", response_model=MenuItemOutput)
def get_menu_item(
    item_id: int,
    service: MenuItemService = Depends(get_menu_item_service),
) -> MenuItemOutput:
    return service.get_menu_item(item_id, available_only=True)
