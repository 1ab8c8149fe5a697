"""Stat category schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from backoffice.models.enums import RecordStatus
from backoffice.schemas.auth import UserSummary


class StatCategoryCreate(BaseModel):
    """Create a new stat category."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=50)
    label: str = Field(..., min_length=1, max_length=100)
    color: str | None = Field(None, max_length=20)
    status: RecordStatus = RecordStatus.ACTIVE


class StatCategoryUpdate(BaseModel):
    """Replace the fields of a stat category."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=50)
    label: str = Field(..., min_length=1, max_length=100)
    color: str = Field(..., min_length=1, max_length=20)
    status: RecordStatus


class StatCategorySummary(BaseModel):
    """Category reference embedded in item responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    label: str
    color: str
    status: RecordStatus


class StatCategoryResponse(StatCategorySummary):
    """Stat category response."""

    created_by: int | None
    creator: UserSummary | None = None
    created_at: datetime
    updated_at: datetime


class StatCategoryItemBrief(BaseModel):
    """Item entry listed under its category."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    parent_id: int | None
    name: str
    label: str
    color: str | None
    status: RecordStatus
    order: int


class StatCategoryDetail(StatCategoryResponse):
    """Stat category with its items in presentation order."""

    items: list[StatCategoryItemBrief] = []


class StatCategoryPage(BaseModel):
    """One page of stat categories."""

    items: list[StatCategoryResponse]
    total: int
    page: int
    page_size: int
    pages: int
