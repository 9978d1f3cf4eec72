"""Page/limit arithmetic shared by list endpoints."""

from __future__ import annotations

from typing import List, NamedTuple, Optional, Sequence, TypeVar

T = TypeVar("T")


class PageRequest(NamedTuple):
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def page_request(
    page: Optional[int],
    limit: Optional[int],
    default_limit: int = 20,
    max_limit: Optional[int] = None,
) -> PageRequest:
    """Normalize 1-based page and page size.

    Missing or non-positive values fall back to page 1 and `default_limit`.
    """
    page = page if page and page > 0 else 1
    limit = limit if limit and limit > 0 else default_limit
    if max_limit is not None:
        limit = min(limit, max_limit)
    return PageRequest(page=page, limit=limit)


def total_pages(total: int, limit: int) -> int:
    """ceil(total / limit) in integer arithmetic."""
    if total <= 0:
        return 0
    return -(-total // limit)


def slice_page(items: Sequence[T], req: PageRequest) -> List[T]:
    return list(items[req.offset:req.offset + req.limit])
