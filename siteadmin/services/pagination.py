import math
from typing import Any, Generic, List, TypeVar
from pydantic import BaseModel
from sqlmodel import Session

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


class Pagination(BaseModel):
    page: int
    pageSize: int
    total: int
    totalPages: int


class Page(BaseModel, Generic[T]):
    data: List[T]
    pagination: Pagination


def total_pages(total: int, page_size: int) -> int:
    return math.ceil(total / page_size) if page_size > 0 else 0


def paginate(session: Session, query, page: int, page_size: int, total: int) -> dict:
    """
    Run ``query`` for one page.

    ``total`` is the unpaginated row count for the same filters. Returns
    ``{"rows": [...], "pagination": Pagination}``; callers shape the rows.
    """
    offset = (page - 1) * page_size
    rows: List[Any] = session.exec(query.offset(offset).limit(page_size)).all()
    return {
        "rows": rows,
        "pagination": Pagination(
            page=page,
            pageSize=page_size,
            total=total,
            totalPages=total_pages(total, page_size),
        ),
    }
