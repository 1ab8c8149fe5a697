"""Stat category model."""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from backoffice.database import Base
from backoffice.models.enums import RecordStatus
from backoffice.models.mixins import TimestampMixin

DEFAULT_CATEGORY_COLOR = "#4f46e5"


class StatCategory(Base, TimestampMixin):
    """Named, colored grouping that owns a list of statistic items."""

    __tablename__ = "stat_categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), unique=True, nullable=False, index=True)
    label = Column(String(100), nullable=False)
    color = Column(String(20), nullable=False, default=DEFAULT_CATEGORY_COLOR)
    status = Column(String(20), nullable=False, default=RecordStatus.ACTIVE.value)
    created_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    # Relationships
    creator = relationship("User", foreign_keys=[created_by])
    items = relationship(
        "StatCategoryItem",
        back_populates="category",
        order_by="[StatCategoryItem.order, StatCategoryItem.id]",
    )
