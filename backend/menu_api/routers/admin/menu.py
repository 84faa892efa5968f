"""
Menu item management endpoints.
"""

from fastapi import APIRouter, Depends, status

from menu_api.models import User
from menu_api.routers.dependencies import get_menu_item_service, require_admin
from menu_api.services.domain import MenuItemService
from shared.utils.admin_schemas import MenuItemCreate, MenuItemOutput, MenuItemUpdate
from shared.utils.schemas import MessageResponse


router = APIRouter(tags=["admin-menu"])


@router.get("/menu", response_model=list[MenuItemOutput])
def list_menu_items(
    category_id: int | None = None,
    category: str | None = None,
    available: bool | None = None,
    service: MenuItemService = Depends(get_menu_item_service),
    user: User = Depends(require_admin),
) -> list[MenuItemOutput]:
    """All menu items, hidden ones included unless ``available`` is given."""
    return service.list_menu_items(
        category_id=category_id,
        category_name=category,
        available=available,
    )


@router.get("/menu/category/{category_id}", response_model=list[MenuItemOutput])
def list_menu_items_by_category(
    category_id: int,
    service: MenuItemService = Depends(get_menu_item_service),
    user: User = Depends(require_admin),
) -> list[MenuItemOutput]:
    return service.get_menu_items_by_category(category_id)


@router.get("/menu/{item_id}", response_model=MenuItemOutput)
def get_menu_item(
    item_id: int,
    service: MenuItemService = Depends(get_menu_item_service),
    user: User = Depends(require_admin),
) -> MenuItemOutput:
    return service.get_menu_item(item_id)


@router.post("/menu", response_model=MenuItemOutput, status_code=status.HTTP_201_CREATED)
def create_menu_item(
    body: MenuItemCreate,
    service: MenuItemService = Depends(get_menu_item_service),
    user: User = Depends(require_admin),
) -> MenuItemOutput:
    return service.create_menu_item(body.model_dump(), actor=user.username)


@router.put("/menu/{item_id}", response_model=MenuItemOutput)
@router.patch("/menu/{item_id}", response_model=MenuItemOutput)
def update_menu_item(
    item_id: int,
    body: MenuItemUpdate,
    service: MenuItemService = Depends(get_menu_item_service),
    user: User = Depends(require_admin),
) -> MenuItemOutput:
    """Partial update. Only the fields present in the body are applied."""
    return service.update_menu_item(
        item_id, body.model_dump(exclude_unset=True), actor=user.username
    )


@router.delete("/menu/{item_id}", response_model=MessageResponse)
def delete_menu_item(
    item_id: int,
    service: MenuItemService = Depends(get_menu_item_service),
    user: User = Depends(require_admin),
) -> MessageResponse:
    service.delete_menu_item(item_id, actor=user.username)
    return MessageResponse(message="Menu item deleted successfully")
