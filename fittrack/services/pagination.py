"""
Offset pagination over select statements
"""
import math
from dataclasses import dataclass, field
from typing import Any, List, Tuple

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

MAX_PAGE_SIZE = 100


def clamp_page(page: int, page_size: int, max_page_size: int = MAX_PAGE_SIZE) -> Tuple[int, int]:
    """page >= 1 and 1 <= page_size <= max_page_size"""
    return max(1, page), min(max_page_size, max(1, page_size))


@dataclass
class Page:
    items: List[Any] = field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 20

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.page_size) if self.page_size else 0


async def paginate(db: AsyncSession, stmt: Select, page: int, page_size: int) -> Page:
    """
    Run ``stmt`` for one page and count the full result.

    Args:
        db: session
        stmt: ordered select of ORM entities
        page: 1-based page number
        page_size: rows per page

    Returns:
        Page with the rows and the total count
    """
    page, page_size = clamp_page(page, page_size)

    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = (await db.execute(count_stmt)).scalar_one()

    result = await db.execute(stmt.offset((page - 1) * page_size).limit(page_size))
    items = list(result.scalars().unique().all())

    return Page(items=items, total=total, page=page, page_size=page_size)
