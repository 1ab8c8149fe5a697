"""Stat category item service: hierarchy rules, ordering and tree assembly."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload, selectinload

from backoffice.exceptions import Conflict, FieldValidationError, NotFound
from backoffice.models.enums import RecordStatus
from backoffice.models.stat_category import StatCategory
from backoffice.models.stat_category_item import NAME_UNIQUE_CONSTRAINT, StatCategoryItem
from backoffice.models.user import User
from backoffice.schemas.stat_category_item import (
    ReorderEntry,
    StatCategoryItemInput,
    StatCategoryItemNode,
)
from backoffice.services.pagination import Page, paginate

logger = logging.getLogger(__name__)

NAME_CONFLICT_MESSAGE = "The name must be unique within the selected category."

# PostgreSQL names the constraint, SQLite lists its columns.
_NAME_VIOLATION_MARKERS = (
    NAME_UNIQUE_CONSTRAINT,
    "stat_category_items.stat_category_id, stat_category_items.name",
)

_NODE_FIELDS = ("id", "parent_id", "stat_category_id", "name", "label", "color", "status", "order")


def _read_field(item: Any, field: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(field)
    return getattr(item, field, None)


def assemble_tree(items: Iterable[Any]) -> list[StatCategoryItemNode]:
    """Build a forest from a flat list of items.

    Items may be ORM rows or mappings carrying at least ``id`` and
    ``parent_id``. Each item is copied into a node with an empty
    ``children`` list; nodes without a parent become roots, the others are
    appended to their parent's children. Items whose parent is not in the
    input are dropped. Roots and children keep input order.
    """
    nodes: dict[int, StatCategoryItemNode] = {}
    for item in items:
        node = StatCategoryItemNode(**{field: _read_field(item, field) for field in _NODE_FIELDS})
        nodes[node.id] = node

    roots = []
    for node in nodes.values():
        if node.parent_id is None:
            roots.append(node)
            continue
        parent = nodes.get(node.parent_id)
        if parent is not None:
            parent.children.append(node)

    return roots


class StatCategoryItemService:
    """Reads and writes stat category items while enforcing the hierarchy rules."""

    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(StatCategoryItem).options(
            joinedload(StatCategoryItem.category),
            joinedload(StatCategoryItem.creator),
            joinedload(StatCategoryItem.parent),
            selectinload(StatCategoryItem.children),
        )

    def list_items(
        self,
        category_id: int | None = None,
        page: int = 1,
        page_size: int = 10,
    ) -> Page:
        """List items by ``order`` then id, optionally for one category."""
        query = self._query()
        if category_id is not None:
            query = query.filter(StatCategoryItem.stat_category_id == category_id)
        query = query.order_by(StatCategoryItem.order, StatCategoryItem.id)
        return paginate(query, page, page_size)

    def get_item(self, item_id: int) -> StatCategoryItem:
        """Get an item with its relations loaded."""
        item = self._query().filter(StatCategoryItem.id == item_id).first()
        if not item:
            raise NotFound("Stat category item not found")
        return item

    def create_item(self, data: StatCategoryItemInput, actor: User | None) -> StatCategoryItem:
        """Validate and persist a new item.

        Checks run in order and the first failure wins: category exists,
        name is free in the category, parent exists, parent shares the
        category. Without an explicit ``order`` the item goes after the
        current last item of its category.
        """
        category = self._get_category(data.stat_category_id)
        self._ensure_name_available(category.id, data.name)
        self._validate_parent(data.parent_id, category.id)

        order = data.order if data.order is not None else self.next_order(category.id)
        item = StatCategoryItem(
            stat_category_id=category.id,
            parent_id=data.parent_id,
            name=data.name,
            label=data.label,
            color=data.color,
            status=data.status.value,
            order=order,
            created_by=actor.id if actor else None,
        )
        self.db.add(item)
        self._commit()
        logger.info(f"Created stat category item {item.id} '{item.name}' in category {category.id}")
        return self.get_item(item.id)

    def update_item(self, item_id: int, data: StatCategoryItemInput) -> StatCategoryItem:
        """Validate and apply new values to an existing item."""
        item = self.get_item(item_id)
        category = self._get_category(data.stat_category_id)
        self._ensure_name_available(category.id, data.name, exclude_id=item.id)
        self._validate_parent(data.parent_id, category.id, item_id=item.id)

        if category.id != item.stat_category_id and self.child_count(item.id) > 0:
            raise FieldValidationError(
                "The category of an item with children cannot be changed.",
                code="CATEGORY_LOCKED",
                field="stat_category_id",
            )

        item.stat_category_id = category.id
        item.parent_id = data.parent_id
        item.name = data.name
        item.label = data.label
        item.color = data.color
        item.status = data.status.value
        if data.order is not None:
            item.order = data.order

        self._commit()
        logger.info(f"Updated stat category item {item_id}")
        return self.get_item(item_id)

    def delete_item(self, item_id: int) -> None:
        """Hard-delete an item that has no children."""
        item = self.get_item(item_id)
        if self.child_count(item.id) > 0:
            logger.warning(f"Refused to delete stat category item {item_id}: it has children")
            raise Conflict("Cannot delete an item that has children.", code="HAS_CHILDREN")

        self.db.delete(item)
        self.db.commit()
        logger.info(f"Deleted stat category item {item_id}")

    def reorder(self, entries: list[ReorderEntry]) -> None:
        """Apply each ``(id, order)`` pair as its own update.

        All ids must exist. Duplicate or non-contiguous order values are
        accepted since ``order`` is only a sort key.
        """
        ids = {entry.id for entry in entries}
        found = {
            item_id
            for (item_id,) in self.db.query(StatCategoryItem.id)
            .filter(StatCategoryItem.id.in_(ids))
            .all()
        }
        missing = sorted(ids - found)
        if missing:
            raise FieldValidationError(
                f"Unknown stat category item ids: {', '.join(str(i) for i in missing)}",
                code="ITEM_NOT_FOUND",
                field="items",
            )

        for entry in entries:
            self.db.query(StatCategoryItem).filter(StatCategoryItem.id == entry.id).update(
                {StatCategoryItem.order: entry.order}, synchronize_session=False
            )
            self.db.commit()
        logger.info(f"Reordered {len(entries)} stat category items")

    def next_order(self, category_id: int) -> int:
        """One past the highest order in the category, or 0 for an empty category."""
        max_order = (
            self.db.query(func.max(StatCategoryItem.order))
            .filter(StatCategoryItem.stat_category_id == category_id)
            .scalar()
        )
        return 0 if max_order is None else max_order + 1

    def child_count(self, item_id: int) -> int:
        return (
            self.db.query(func.count(StatCategoryItem.id))
            .filter(StatCategoryItem.parent_id == item_id)
            .scalar()
        )

    def descendant_ids(self, item: StatCategoryItem) -> set[int]:
        """Ids of every item below ``item`` in its category."""
        rows = (
            self.db.query(StatCategoryItem.id, StatCategoryItem.parent_id)
            .filter(StatCategoryItem.stat_category_id == item.stat_category_id)
            .all()
        )
        children_by_parent: dict[int, list[int]] = {}
        for child_id, parent_id in rows:
            if parent_id is not None:
                children_by_parent.setdefault(parent_id, []).append(child_id)

        found: set[int] = set()
        pending = list(children_by_parent.get(item.id, []))
        while pending:
            current = pending.pop()
            if current in found or current == item.id:
                continue
            found.add(current)
            pending.extend(children_by_parent.get(current, []))
        return found

    def active_categories(self) -> list[StatCategory]:
        return (
            self.db.query(StatCategory)
            .filter(StatCategory.status == RecordStatus.ACTIVE.value)
            .order_by(StatCategory.id)
            .all()
        )

    def parent_candidates(
        self, category_id: int, exclude_ids: set[int] | None = None
    ) -> list[StatCategoryItem]:
        """Active items of a category that may be chosen as a parent."""
        query = self.db.query(StatCategoryItem).filter(
            StatCategoryItem.stat_category_id == category_id,
            StatCategoryItem.status == RecordStatus.ACTIVE.value,
        )
        if exclude_ids:
            query = query.filter(StatCategoryItem.id.notin_(exclude_ids))
        return query.order_by(StatCategoryItem.order, StatCategoryItem.id).all()

    def create_form_options(self, category_id: int | None = None) -> dict[str, Any]:
        """Categories and parent candidates for the creation form."""
        return {
            "categories": self.active_categories(),
            "preselected_category_id": category_id,
            "parent_items": self.parent_candidates(category_id) if category_id else [],
        }

    def edit_form_options(self, item_id: int) -> dict[str, Any]:
        """The item plus categories and parent candidates for the edit form.

        The item itself and its descendants are never offered as parents.
        """
        item = self.get_item(item_id)
        excluded = self.descendant_ids(item) | {item.id}
        return {
            "item": item,
            "categories": self.active_categories(),
            "parent_items": self.parent_candidates(item.stat_category_id, excluded),
            "has_children": item.has_children,
        }

    def tree(self, category_id: int, include_inactive: bool = False) -> list[StatCategoryItemNode]:
        """Items of one category assembled into a forest."""
        self._get_category(category_id)
        query = self.db.query(StatCategoryItem).filter(
            StatCategoryItem.stat_category_id == category_id
        )
        if not include_inactive:
            query = query.filter(StatCategoryItem.status == RecordStatus.ACTIVE.value)
        items = query.order_by(StatCategoryItem.order, StatCategoryItem.id).all()
        return assemble_tree(items)

    def _get_category(self, category_id: int) -> StatCategory:
        category = self.db.get(StatCategory, category_id)
        if category is None:
            raise FieldValidationError(
                "The selected category does not exist.",
                code="CATEGORY_NOT_FOUND",
                field="stat_category_id",
            )
        return category

    def _ensure_name_available(
        self, category_id: int, name: str, exclude_id: int | None = None
    ) -> None:
        query = self.db.query(StatCategoryItem.id).filter(
            StatCategoryItem.stat_category_id == category_id,
            StatCategoryItem.name == name,
        )
        if exclude_id is not None:
            query = query.filter(StatCategoryItem.id != exclude_id)
        if query.first() is not None:
            raise Conflict(NAME_CONFLICT_MESSAGE, code="NAME_CONFLICT", field="name")

    def _validate_parent(
        self, parent_id: int | None, category_id: int, item_id: int | None = None
    ) -> None:
        if parent_id is None:
            return

        if item_id is not None and parent_id == item_id:
            raise FieldValidationError(
                "An item cannot be its own parent.", code="SELF_PARENT", field="parent_id"
            )

        parent = self.db.get(StatCategoryItem, parent_id)
        if parent is None:
            raise FieldValidationError(
                "The selected parent item does not exist.",
                code="PARENT_NOT_FOUND",
                field="parent_id",
            )
        if parent.stat_category_id != category_id:
            raise FieldValidationError(
                "The parent item must belong to the same category.",
                code="PARENT_CATEGORY_MISMATCH",
                field="parent_id",
            )

        if item_id is not None:
            self._ensure_no_cycle(parent, item_id)

    def _ensure_no_cycle(self, parent: StatCategoryItem, item_id: int) -> None:
        # Walk up from the proposed parent; reaching the item means a cycle.
        visited: set[int] = set()
        current = parent
        while current is not None and current.id not in visited:
            if current.id == item_id:
                raise FieldValidationError(
                    "The selected parent is a descendant of this item.",
                    code="CYCLE_DETECTED",
                    field="parent_id",
                )
            visited.add(current.id)
            current = current.parent

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            if any(marker in str(exc.orig) for marker in _NAME_VIOLATION_MARKERS):
                logger.warning("Unique index rejected a stat category item write")
                raise Conflict(NAME_CONFLICT_MESSAGE, code="NAME_CONFLICT", field="name") from None
            logger.error(f"Integrity error on stat category item write: {exc.orig}")
            raise Conflict(
                "The item could not be saved because a related record changed.",
                code="INTEGRITY_ERROR",
            ) from None
