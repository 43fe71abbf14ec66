"""Shared pagination helpers for list endpoints"""

import math
from typing import Any, Callable, Optional, Union

from fastapi import Query
from sqlalchemy.orm import Query as SAQuery

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


class PaginationParams:
    """
    Query parameters `page` and `pageSize`.

    Pagination is only applied when at least one of them is supplied so
    that existing clients receiving bare lists keep working.
    """

    def __init__(
        self,
        page: Optional[int] = Query(None, ge=1),
        pageSize: Optional[int] = Query(None, ge=1, le=MAX_PAGE_SIZE),
    ):
        self.page = page
        self.page_size = pageSize

    @property
    def enabled(self) -> bool:
        return self.page is not None or self.page_size is not None


def paginate(
    query: SAQuery, params: PaginationParams, serialize: Callable[[Any], Any]
) -> Union[list, dict]:
    """Run query and return either the serialized rows or a paginated envelope"""
    if not params.enabled:
        return [serialize(row) for row in query.all()]

    page = params.page or 1
    page_size = params.page_size or DEFAULT_PAGE_SIZE
    total_items = query.order_by(None).count()
    rows = query.offset((page - 1) * page_size).limit(page_size).all()

    return {
        "data": [serialize(row) for row in rows],
        "pagination": {
            "currentPage": page,
            "totalPages": math.ceil(total_items / page_size),
            "totalItems": total_items,
            "pageSize": page_size,
        },
    }
