"""
Pagination helpers.

Provides standardized pagination for list endpoints. Pages are 1-indexed and
page size is capped at 100 items.
"""

from __future__ import annotations

from typing import Any, List, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from constituency_hub.core.models.io.common import MAX_PAGE_SIZE, Pagination


async def paginate(
    session: AsyncSession,
    query: Select,
    page: int = 1,
    limit: int = 10,
) -> Tuple[List[Any], Pagination]:
    """
    Apply pagination to a SQLAlchemy query.

    Args:
        session: Database session
        query: Base query selecting a single entity, already filtered and ordered
        page: Page number (1-indexed)
        limit: Items per page

    Returns:
        The entities of the requested page and the matching ``Pagination``
    """
    page = max(1, page)
    limit = max(1, min(MAX_PAGE_SIZE, limit))

    count_stmt = select(func.count()).select_from(query.order_by(None).subquery())
    total = (await session.execute(count_stmt)).scalar() or 0

    result = await session.execute(query.offset((page - 1) * limit).limit(limit))
    items = list(result.scalars().all())
    return items, Pagination.build(page=page, limit=limit, total=total)
