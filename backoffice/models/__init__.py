"""SQLAlchemy models."""

from backoffice.models.role import Permission, Role
from backoffice.models.stat_category import StatCategory
from backoffice.models.stat_category_item import StatCategoryItem
from backoffice.models.user import User

__all__ = [
    "User",
    "Role",
    "Permission",
    "StatCategory",
    "StatCategoryItem",
]
