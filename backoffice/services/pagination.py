"""Offset pagination for ORM queries."""

import math
from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Query


@dataclass
class Page:
    """A slice of query results with its position in the full set."""

    items: list[Any]
    total: int
    page: int
    page_size: int

    @property
    def pages(self) -> int:
        return max(1, math.ceil(self.total / self.page_size))


def paginate(query: Query, page: int, page_size: int) -> Page:
    """Run ``query`` for one page. ``page`` is 1-based."""
    total = query.order_by(None).count()
    items = query.offset((page - 1) * page_size).limit(page_size).all()
    return Page(items=items, total=total, page=page, page_size=page_size)
