"""Stat category item model."""

from sqlalchemy import Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from backoffice.database import Base
from backoffice.models.enums import RecordStatus
from backoffice.models.mixins import TimestampMixin

NAME_UNIQUE_CONSTRAINT = "uq_stat_category_items_category_name"


class StatCategoryItem(Base, TimestampMixin):
    """Entry within a stat category, optionally nested under an item of the same category."""

    __tablename__ = "stat_category_items"
    __table_args__ = (
        UniqueConstraint("stat_category_id", "name", name=NAME_UNIQUE_CONSTRAINT),
    )

    id = Column(Integer, primary_key=True, index=True)
    stat_category_id = Column(
        Integer, ForeignKey("stat_categories.id"), nullable=False, index=True
    )
    parent_id = Column(
        Integer,
        ForeignKey("stat_category_items.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    name = Column(String(50), nullable=False)
    label = Column(String(100), nullable=False)
    color = Column(String(20), nullable=True)
    status = Column(String(20), nullable=False, default=RecordStatus.ACTIVE.value)
    order = Column(Integer, nullable=False, default=0)
    created_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    # Relationships
    category = relationship("StatCategory", back_populates="items")
    creator = relationship("User", foreign_keys=[created_by])
    parent = relationship("StatCategoryItem", remote_side=[id], back_populates="children")
    children = relationship(
        "StatCategoryItem",
        back_populates="parent",
        order_by="[StatCategoryItem.order, StatCategoryItem.id]",
    )

    @property
    def display_color(self) -> str | None:
        """Item color, falling back to the owning category's color."""
        if self.color:
            return self.color
        return self.category.color if self.category else None

    @property
    def has_children(self) -> bool:
        """Check if any item names this one as its parent."""
        return len(self.children) > 0
