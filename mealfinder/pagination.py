"""
Pagination arithmetic for client-side result paging.

All page numbers are 1-based. A result set always has at least one page, even
when it is empty, so the UI can render a degenerate "Page 1 / 1".
"""

from typing import List, Sequence, TypeVar

from mealfinder.models import PaginationInfo

T = TypeVar("T")

# Number of numbered page buttons shown in the pagination strip
PAGE_WINDOW_WIDTH = 5


def total_pages(total: int, page_size: int) -> int:
    """
    Number of pages needed for total items, never less than 1.

    Raises:
        ValueError: If page_size is not positive or total is negative
    """
    if page_size <= 0:
        raise ValueError(f"page_size must be positive, got {page_size}")
    if total < 0:
        raise ValueError(f"total must not be negative, got {total}")
    return max(1, -(-total // page_size))


def clamp_page(page: int, total: int, page_size: int) -> int:
    """Clamp a requested page number into [1, total_pages]."""
    return min(max(1, int(page)), total_pages(total, page_size))


def page_slice(items: Sequence[T], page: int, page_size: int) -> List[T]:
    """Return the items shown on the given 1-based page."""
    start = (page - 1) * page_size
    return list(items[start:start + page_size])


def pagination_info(page: int, total: int, page_size: int) -> PaginationInfo:
    """Build pagination metadata for an already clamped page."""
    pages = total_pages(total, page_size)
    return PaginationInfo(
        current_page=page,
        total_pages=pages,
        has_prev=page > 1,
        has_next=page < pages,
    )


def page_window(current: int, pages: int, width: int = PAGE_WINDOW_WIDTH) -> List[int]:
    """
    Page numbers for the numbered button strip, centered on the current page.

    The window is shifted rather than shrunk near either end, so it always
    holds min(width, pages) entries.

    Examples:
        >>> page_window(1, 10)
        [1, 2, 3, 4, 5]
        >>> page_window(10, 10)
        [6, 7, 8, 9, 10]
        >>> page_window(2, 3)
        [1, 2, 3]
    """
    if width <= 0 or pages <= 0:
        return []
    start = max(1, current - width // 2)
    end = min(pages, start + width - 1)
    start = max(1, end - width + 1)
    return list(range(start, end + 1))
