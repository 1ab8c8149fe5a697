"""Pydantic schemas for API requests and responses."""

from backoffice.schemas.auth import AuthResponse, UserLogin, UserRegister, UserResponse
from backoffice.schemas.stat_category import (
    StatCategoryCreate,
    StatCategoryDetail,
    StatCategoryPage,
    StatCategoryResponse,
    StatCategoryUpdate,
)
from backoffice.schemas.stat_category_item import (
    ReorderRequest,
    StatCategoryItemCreate,
    StatCategoryItemNode,
    StatCategoryItemPage,
    StatCategoryItemResponse,
    StatCategoryItemUpdate,
)

__all__ = [
    "UserRegister",
    "UserLogin",
    "AuthResponse",
    "UserResponse",
    "StatCategoryCreate",
    "StatCategoryUpdate",
    "StatCategoryResponse",
    "StatCategoryDetail",
    "StatCategoryPage",
    "StatCategoryItemCreate",
    "StatCategoryItemUpdate",
    "StatCategoryItemResponse",
    "StatCategoryItemPage",
    "StatCategoryItemNode",
    "ReorderRequest",
]
