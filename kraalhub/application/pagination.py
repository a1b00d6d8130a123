from __future__ import annotations

from dataclasses import dataclass

DEFAULT_PER_PAGE = 8
MAX_PER_PAGE = 100


@dataclass(slots=True, frozen=True)
class PageRequest:
    page: int
    per_page: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page

    @property
    def limit(self) -> int:
        return self.per_page


def page_request(page: int | None, per_page: int | None, *, default: int = DEFAULT_PER_PAGE) -> PageRequest:
    """Normalize 1-based paging input.

    Pages below 1 read as the first page; a page size below 1 falls back
    to the default rather than erroring.
    """
    page = page if page and page > 1 else 1
    if per_page is None or per_page < 1:
        per_page = default
    return PageRequest(page=page, per_page=min(per_page, MAX_PER_PAGE))


def total_pages(total: int, per_page: int) -> int:
    if total <= 0:
        return 0
    return (total + per_page - 1) // per_page
