"""
Category management endpoints.
"""

from fastapi import APIRouter, Depends, status

from menu_api.models import User
from menu_api.routers.dependencies import get_category_service, require_admin
from menu_api.services.domain import CategoryService
from shared.utils.admin_schemas import CategoryCreate, CategoryOutput, CategoryUpdate
from shared.utils.schemas import MessageResponse


router = APIRouter(tags=["admin-categories"])


@router.get("/categories", response_model=list[CategoryOutput])
def list_categories(
    service: CategoryService = Depends(get_category_service),
    user: User = Depends(require_admin),
) -> list[CategoryOutput]:
    """List categories grouped FOOD first, then by sort_order and name."""
    return service.list_categories()


@router.get("/categories/{category_id}", response_model=CategoryOutput)
def get_category(
    category_id: int,
    service: CategoryService = Depends(get_category_service),
    user: User = Depends(require_admin),
) -> CategoryOutput:
    return service.get_category(category_id)


@router.post("/categories", response_model=CategoryOutput, status_code=status.HTTP_201_CREATED)
def create_category(
    body: CategoryCreate,
    service: CategoryService = Depends(get_category_service),
    user: User = Depends(require_admin),
) -> CategoryOutput:
    """Create a category. sort_order defaults to the end of its group."""
    return service.create_category(body.model_dump(exclude_unset=True), actor=user.username)


@router.put("/categories/{category_id}", response_model=CategoryOutput)
@router.patch("/categories/{category_id}", response_model=CategoryOutput)
def update_category(
    category_id: int,
    body: CategoryUpdate,
    service: CategoryService = Depends(get_category_service),
    user: User = Depends(require_admin),
) -> CategoryOutput:
    """Partial update. Only the fields present in the body are applied."""
    return service.update_category(
        category_id, body.model_dump(exclude_unset=True), actor=user.username
    )


@router.delete("/categories/{category_id}", response_model=MessageResponse)
def delete_category(
    category_id: int,
    service: CategoryService = Depends(get_category_service),
    user: User = Depends(require_admin),
) -> MessageResponse:
    """Delete a category. 409 while any menu item still references it."""
    service.delete_category(category_id, actor=user.username)
    return MessageResponse(message="Category deleted successfully")
