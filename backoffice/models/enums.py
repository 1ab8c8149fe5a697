"""Enums for model fields."""

from enum import Enum


class RecordStatus(str, Enum):
    """Publication status shared by stat categories and their items."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class Resource(str, Enum):
    """Resources guarded by role permissions."""

    STAT_CATEGORY = "stat_category"
    STAT_CATEGORY_ITEM = "stat_category_item"


class Action(str, Enum):
    """Actions a permission can grant on a resource."""

    VIEW_ANY = "view_any"
    VIEW = "view"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"

    def is_read_only(self) -> bool:
        """Check if this action only reads data."""
        return self in (Action.VIEW_ANY, Action.VIEW)


def permission_name(resource: Resource, action: Action) -> str:
    """Build the stored permission name, e.g. ``stat_category_item.update``."""
    return f"{resource.value}.{action.value}"
