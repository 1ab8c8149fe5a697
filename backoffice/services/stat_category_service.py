"""Stat category service."""

import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload, selectinload

from backoffice.config import Settings, get_settings
from backoffice.exceptions import Conflict, NotFound
from backoffice.models.stat_category import StatCategory
from backoffice.models.stat_category_item import StatCategoryItem
from backoffice.models.user import User
from backoffice.schemas.stat_category import StatCategoryCreate, StatCategoryUpdate
from backoffice.services.pagination import Page, paginate

logger = logging.getLogger(__name__)

# PostgreSQL names the unique index, SQLite lists its column.
_NAME_VIOLATION_MARKERS = ("ix_stat_categories_name", "stat_categories.name")


class StatCategoryService:
    """CRUD for the categories that own stat items."""

    def __init__(self, db: Session, settings: Settings | None = None):
        self.db = db
        self.settings = settings or get_settings()

    def list_categories(self, page: int = 1, page_size: int = 10) -> Page:
        """Newest categories first."""
        query = (
            self.db.query(StatCategory)
            .options(joinedload(StatCategory.creator))
            .order_by(StatCategory.created_at.desc(), StatCategory.id.desc())
        )
        return paginate(query, page, page_size)

    def get_category(self, category_id: int) -> StatCategory:
        category = (
            self.db.query(StatCategory)
            .options(joinedload(StatCategory.creator), selectinload(StatCategory.items))
            .filter(StatCategory.id == category_id)
            .first()
        )
        if not category:
            raise NotFound("Stat category not found")
        return category

    def create_category(self, data: StatCategoryCreate, actor: User | None) -> StatCategory:
        self._ensure_name_available(data.name)
        category = StatCategory(
            name=data.name,
            label=data.label,
            color=data.color or self.settings.default_category_color,
            status=data.status.value,
            created_by=actor.id if actor else None,
        )
        self.db.add(category)
        self._commit()
        logger.info(f"Created stat category {category.id} '{category.name}'")
        return self.get_category(category.id)

    def update_category(self, category_id: int, data: StatCategoryUpdate) -> StatCategory:
        category = self.get_category(category_id)
        self._ensure_name_available(data.name, exclude_id=category.id)

        category.name = data.name
        category.label = data.label
        category.color = data.color
        category.status = data.status.value

        self._commit()
        logger.info(f"Updated stat category {category_id}")
        return self.get_category(category_id)

    def delete_category(self, category_id: int) -> None:
        """Delete a category that no longer owns any item."""
        category = self.get_category(category_id)
        item_count = (
            self.db.query(func.count(StatCategoryItem.id))
            .filter(StatCategoryItem.stat_category_id == category.id)
            .scalar()
        )
        if item_count:
            logger.warning(f"Refused to delete stat category {category_id}: {item_count} items")
            raise Conflict(
                "Cannot delete a category that still has items.", code="CATEGORY_HAS_ITEMS"
            )

        self.db.delete(category)
        self.db.commit()
        logger.info(f"Deleted stat category {category_id}")

    def _ensure_name_available(self, name: str, exclude_id: int | None = None) -> None:
        query = self.db.query(StatCategory.id).filter(StatCategory.name == name)
        if exclude_id is not None:
            query = query.filter(StatCategory.id != exclude_id)
        if query.first() is not None:
            raise Conflict("The name has already been taken.", code="NAME_CONFLICT", field="name")

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            if any(marker in str(exc.orig) for marker in _NAME_VIOLATION_MARKERS):
                logger.warning("Unique index rejected a stat category write")
                raise Conflict(
                    "The name has already been taken.", code="NAME_CONFLICT", field="name"
                ) from None
            logger.error(f"Integrity error on stat category write: {exc.orig}")
            raise Conflict(
                "The category could not be saved because a related record changed.",
                code="INTEGRITY_ERROR",
            ) from None
