"""Stat category API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from backoffice.api.dependencies import get_stat_category_service, require_permission
from backoffice.config import get_settings
from backoffice.models.enums import Action, Resource
from backoffice.models.user import User
from backoffice.schemas.stat_category import (
    StatCategoryCreate,
    StatCategoryDetail,
    StatCategoryPage,
    StatCategoryResponse,
    StatCategoryUpdate,
)
from backoffice.schemas.stat_category_item import MessageResponse
from backoffice.services.stat_category_service import StatCategoryService

settings = get_settings()

router = APIRouter(prefix="/api/v1/stat-categories", tags=["stat-categories"])

CategoryService = Annotated[StatCategoryService, Depends(get_stat_category_service)]


def _require(action: Action):
    return require_permission(Resource.STAT_CATEGORY, action)


@router.get("", response_model=StatCategoryPage)
def list_categories(
    current_user: Annotated[User, Depends(_require(Action.VIEW_ANY))],
    service: CategoryService,
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[int | None, Query(ge=1, le=settings.max_page_size)] = None,
):
    """List categories, newest first."""
    result = service.list_categories(page=page, page_size=page_size or settings.default_page_size)
    return StatCategoryPage(
        items=[StatCategoryResponse.model_validate(category) for category in result.items],
        total=result.total,
        page=result.page,
        page_size=result.page_size,
        pages=result.pages,
    )


@router.post("", response_model=StatCategoryDetail, status_code=status.HTTP_201_CREATED)
def create_category(
    category_data: StatCategoryCreate,
    current_user: Annotated[User, Depends(_require(Action.CREATE))],
    service: CategoryService,
):
    """Create a new category."""
    return service.create_category(category_data, current_user)


@router.get("/{category_id}", response_model=StatCategoryDetail)
def get_category(
    category_id: int,
    current_user: Annotated[User, Depends(_require(Action.VIEW))],
    service: CategoryService,
):
    """Get a category with its items in presentation order."""
    return service.get_category(category_id)


@router.api_route("/{category_id}", methods=["PUT", "PATCH"], response_model=StatCategoryDetail)
def update_category(
    category_id: int,
    category_data: StatCategoryUpdate,
    current_user: Annotated[User, Depends(_require(Action.UPDATE))],
    service: CategoryService,
):
    """Update a category."""
    return service.update_category(category_id, category_data)


@router.delete("/{category_id}", response_model=MessageResponse)
def delete_category(
    category_id: int,
    current_user: Annotated[User, Depends(_require(Action.DELETE))],
    service: CategoryService,
):
    """Delete a category that has no items."""
    service.delete_category(category_id)
    return MessageResponse(message="Category deleted successfully.")
