"""Stat category item API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from backoffice.api.dependencies import get_stat_category_item_service, require_permission
from backoffice.config import get_settings
from backoffice.models.enums import Action, Resource
from backoffice.models.user import User
from backoffice.schemas.stat_category_item import (
    CreateFormOptions,
    EditFormOptions,
    MessageResponse,
    ReorderRequest,
    StatCategoryItemCreate,
    StatCategoryItemNode,
    StatCategoryItemPage,
    StatCategoryItemResponse,
    StatCategoryItemUpdate,
)
from backoffice.services.stat_category_item_service import StatCategoryItemService

settings = get_settings()

router = APIRouter(prefix="/api/v1/stat-category-items", tags=["stat-category-items"])

ItemService = Annotated[StatCategoryItemService, Depends(get_stat_category_item_service)]


def _require(action: Action):
    return require_permission(Resource.STAT_CATEGORY_ITEM, action)


@router.get("", response_model=StatCategoryItemPage)
def list_items(
    current_user: Annotated[User, Depends(_require(Action.VIEW_ANY))],
    service: ItemService,
    category_id: int | None = None,
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[int | None, Query(ge=1, le=settings.max_page_size)] = None,
):
    """List items in presentation order, optionally for one category."""
    result = service.list_items(
        category_id=category_id,
        page=page,
        page_size=page_size or settings.default_page_size,
    )
    return StatCategoryItemPage(
        items=[StatCategoryItemResponse.model_validate(item) for item in result.items],
        total=result.total,
        page=result.page,
        page_size=result.page_size,
        pages=result.pages,
    )


@router.get("/create", response_model=CreateFormOptions)
def create_form(
    current_user: Annotated[User, Depends(_require(Action.CREATE))],
    service: ItemService,
    category_id: int | None = None,
):
    """Active categories and parent candidates for a new item."""
    return service.create_form_options(category_id)


@router.get("/tree", response_model=list[StatCategoryItemNode])
def get_tree(
    current_user: Annotated[User, Depends(_require(Action.VIEW_ANY))],
    service: ItemService,
    category_id: int,
    include_inactive: bool = False,
):
    """Items of a category as a forest for hierarchical selection."""
    return service.tree(category_id, include_inactive=include_inactive)


@router.post("/reorder", response_model=MessageResponse)
def reorder_items(
    reorder_data: ReorderRequest,
    current_user: Annotated[User, Depends(_require(Action.UPDATE))],
    service: ItemService,
):
    """Set new sort keys for a batch of items."""
    service.reorder(reorder_data.items)
    return MessageResponse(message="Items reordered successfully")


@router.post("", response_model=StatCategoryItemResponse, status_code=status.HTTP_201_CREATED)
def create_item(
    item_data: StatCategoryItemCreate,
    current_user: Annotated[User, Depends(_require(Action.CREATE))],
    service: ItemService,
):
    """Create a new item."""
    return service.create_item(item_data, current_user)


@router.get("/{item_id}", response_model=StatCategoryItemResponse)
def get_item(
    item_id: int,
    current_user: Annotated[User, Depends(_require(Action.VIEW))],
    service: ItemService,
):
    """Get an item with its category, creator, parent and children."""
    return service.get_item(item_id)


@router.get("/{item_id}/edit", response_model=EditFormOptions)
def edit_form(
    item_id: int,
    current_user: Annotated[User, Depends(_require(Action.UPDATE))],
    service: ItemService,
):
    """Item, categories and allowed parents for the edit form."""
    return service.edit_form_options(item_id)


@router.api_route("/{item_id}", methods=["PUT", "PATCH"], response_model=StatCategoryItemResponse)
def update_item(
    item_id: int,
    item_data: StatCategoryItemUpdate,
    current_user: Annotated[User, Depends(_require(Action.UPDATE))],
    service: ItemService,
):
    """Update an item."""
    return service.update_item(item_id, item_data)


@router.delete("/{item_id}", response_model=MessageResponse)
def delete_item(
    item_id: int,
    current_user: Annotated[User, Depends(_require(Action.DELETE))],
    service: ItemService,
):
    """Delete an item. Items with children cannot be deleted."""
    service.delete_item(item_id)
    return MessageResponse(message="Item deleted successfully.")
