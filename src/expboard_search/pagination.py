"""Page slicing with clamped page numbers."""

from __future__ import annotations

import math
from typing import TypeVar

from expboard_core.models.results import Page

T = TypeVar("T")


def total_pages(total_items: int, page_size: int) -> int:
    """Number of pages, never less than 1."""
    return max(1, math.ceil(total_items / page_size))


def clamp_page(page_number: int, pages: int) -> int:
    """Clamp a 1-indexed page number into ``[1, pages]``."""
    return min(max(1, page_number), pages)


def paginate(items: list[T], page_size: int, page_number: int) -> Page[T]:
    """Return one page of ``items``.

    Out-of-range page numbers are clamped rather than rejected, so a page
    left over from a larger result set still shows the last page.

    Raises:
        ValueError: If ``page_size`` is less than 1.
    """
    if page_size < 1:
        msg = f"page_size must be >= 1, got {page_size}"
        raise ValueError(msg)

    pages = total_pages(len(items), page_size)
    current = clamp_page(page_number, pages)
    start = (current - 1) * page_size
    return Page(
        items=items[start : start + page_size],
        page_number=current,
        page_size=page_size,
        total_pages=pages,
        total_items=len(items),
    )
