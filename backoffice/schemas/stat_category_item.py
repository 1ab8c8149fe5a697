"""Stat category item schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from backoffice.models.enums import RecordStatus
from backoffice.schemas.auth import UserSummary
from backoffice.schemas.stat_category import StatCategorySummary

# Form clients send exactly these for "no parent".
NULL_PARENT_SENTINELS = ("null", "")


class StatCategoryItemInput(BaseModel):
    """Fields submitted when creating or updating an item."""

    model_config = ConfigDict(str_strip_whitespace=True)

    stat_category_id: int
    parent_id: int | None = None
    name: str = Field(..., min_length=1, max_length=50)
    label: str = Field(..., min_length=1, max_length=100)
    color: str | None = Field(None, max_length=20)
    status: RecordStatus
    order: int | None = Field(None, ge=0)

    @field_validator("parent_id", mode="before")
    @classmethod
    def normalize_parent_id(cls, value: Any) -> Any:
        """Map the serialized "no parent" sentinels to ``None``."""
        if isinstance(value, str) and value in NULL_PARENT_SENTINELS:
            return None
        return value


class StatCategoryItemCreate(StatCategoryItemInput):
    """Create a new item."""


class StatCategoryItemUpdate(StatCategoryItemInput):
    """Update an item. ``order`` left out keeps the stored value."""


class StatCategoryItemSummary(BaseModel):
    """Parent or child reference embedded in item responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    stat_category_id: int
    parent_id: int | None
    name: str
    label: str
    color: str | None
    status: RecordStatus
    order: int


class StatCategoryItemResponse(StatCategoryItemSummary):
    """Item with its category, creator, parent and direct children."""

    display_color: str | None
    created_by: int | None
    created_at: datetime
    updated_at: datetime
    category: StatCategorySummary
    creator: UserSummary | None = None
    parent: StatCategoryItemSummary | None = None
    children: list[StatCategoryItemSummary] = []
    has_children: bool = False


class StatCategoryItemPage(BaseModel):
    """One page of items."""

    items: list[StatCategoryItemResponse]
    total: int
    page: int
    page_size: int
    pages: int


class StatCategoryItemNode(BaseModel):
    """Item in an assembled tree."""

    id: int
    parent_id: int | None = None
    stat_category_id: int | None = None
    name: str | None = None
    label: str | None = None
    color: str | None = None
    status: RecordStatus | None = None
    order: int | None = None
    children: list["StatCategoryItemNode"] = []


StatCategoryItemNode.model_rebuild()


class ReorderEntry(BaseModel):
    """New sort key for one item."""

    id: int
    order: int = Field(..., ge=0)


class ReorderRequest(BaseModel):
    """Batch of order updates."""

    items: list[ReorderEntry] = Field(..., min_length=1)


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str


class CategoryOption(BaseModel):
    """Active category offered in item forms."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    label: str
    color: str


class ParentOption(BaseModel):
    """Item offered as a parent candidate."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    label: str


class CreateFormOptions(BaseModel):
    """Data needed to render the item creation form."""

    categories: list[CategoryOption]
    preselected_category_id: int | None
    parent_items: list[ParentOption]


class EditFormOptions(BaseModel):
    """Data needed to render the item edit form."""

    item: StatCategoryItemResponse
    categories: list[CategoryOption]
    parent_items: list[ParentOption]
    has_children: bool
