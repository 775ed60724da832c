"""
Table Pagination

Page arithmetic for the dashboard tables. Everything visible is derived
from (items, current_page, page_size) on access; only page and size are
stored.

Convention for an empty sequence: total_pages is 0, current_page stays 1
and the visible slice is empty.
"""

import math
from typing import Any, Dict, Generic, List, Sequence, TypeVar

T = TypeVar("T")

PAGE_SIZE_OPTIONS = (5, 10, 25, 50)


class Paginator(Generic[T]):
    """Pagination state over an ordered sequence."""

    def __init__(self, items: Sequence[T] = (), page_size: int = 10):
        if page_size <= 0:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self._items: Sequence[T] = items
        self._page_size = page_size
        self._current_page = 1

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def total_items(self) -> int:
        return len(self._items)

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_items / self._page_size)

    @property
    def items(self) -> List[T]:
        """Rows on the current page."""
        start = (self._current_page - 1) * self._page_size
        return list(self._items[start:start + self._page_size])

    @property
    def has_next(self) -> bool:
        return self._current_page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self._current_page > 1

    @property
    def start_item(self) -> int:
        """1-based index of the first visible row (0 when empty)."""
        if self.total_items == 0:
            return 0
        return (self._current_page - 1) * self._page_size + 1

    @property
    def end_item(self) -> int:
        return min(self._current_page * self._page_size, self.total_items)

    def page_numbers(self, max_visible: int = 5) -> List[int]:
        """Window of page numbers around the current page."""
        if self.total_pages == 0:
            return []
        start = max(1, self._current_page - max_visible // 2)
        end = min(self.total_pages, start + max_visible - 1)
        start = max(1, end - max_visible + 1)
        return list(range(start, end + 1))

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def go_to_page(self, page: int) -> int:
        """Jump to page, clamped into [1, total_pages]. Returns the new page."""
        self._current_page = max(1, min(page, max(self.total_pages, 1)))
        return self._current_page

    def next_page(self) -> int:
        if self.has_next:
            self._current_page += 1
        return self._current_page

    def previous_page(self) -> int:
        if self.has_previous:
            self._current_page -= 1
        return self._current_page

    def set_page_size(self, page_size: int) -> None:
        """Change the page size and go back to page 1."""
        if page_size <= 0:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self._page_size = page_size
        self._current_page = 1

    def set_items(self, items: Sequence[T], reset: bool = True) -> None:
        """
        Rebind the underlying sequence.

        Args:
            items: New ordered sequence
            reset: Go back to page 1; otherwise keep the page, clamped
        """
        self._items = items
        if reset:
            self._current_page = 1
        else:
            self.go_to_page(self._current_page)

    def to_dict(self) -> Dict[str, Any]:
        """Navigation metadata for JSON output."""
        return {
            "current_page": self._current_page,
            "page_size": self._page_size,
            "total_pages": self.total_pages,
            "total_items": self.total_items,
            "start_item": self.start_item,
            "end_item": self.end_item,
            "has_next": self.has_next,
            "has_previous": self.has_previous,
        }
