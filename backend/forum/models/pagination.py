"""Offset pagination over SQLAlchemy select statements."""

import math
from dataclasses import dataclass, field
from typing import Generic, Sequence, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    items: Sequence[T] = field(default_factory=list)
    total: int = 0
    per_page: int = 15
    current_page: int = 1

    @property
    def last_page(self) -> int:
        return max(math.ceil(self.total / self.per_page), 1)

    @property
    def has_more_pages(self) -> bool:
        return self.current_page < self.last_page


async def paginate(session: AsyncSession, query: Select, page: int, per_page: int) -> Page:
    """Run `query` for one page of results.

    Args:
        session: Open async session
        query: Select statement with ordering applied
        page: 1-based page number; values below 1 are treated as 1
        per_page: Page size

    Returns:
        Page with the items of the requested page and the total row count.
    """
    page = max(page, 1)
    total = await session.scalar(select(func.count()).select_from(query.order_by(None).subquery()))
    result = await session.execute(query.limit(per_page).offset((page - 1) * per_page))
    return Page(items=result.scalars().unique().all(), total=total or 0, per_page=per_page, current_page=page)
