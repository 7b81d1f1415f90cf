"""
Fixed-size paging over the derived view.

Page indexes are 1-based. An empty view has zero pages; the current index
still stays at 1 so it is always within [1, max(1, total_pages)].
"""

import math
from typing import List, Sequence

from .models import PAGE_SIZE, JobRecord

FIRST = "first"
PREVIOUS = "previous"
NEXT = "next"
LAST = "last"
PAGE_ACTIONS = (FIRST, PREVIOUS, NEXT, LAST)


def total_pages(count: int, size: int = PAGE_SIZE) -> int:
    return math.ceil(count / size) if count > 0 else 0


def navigate(index: int, pages: int, action: str) -> int:
    """Return the page index after a navigation action."""
    if action == FIRST:
        return 1
    if action == PREVIOUS:
        return index - 1 if index > 1 else index
    if action == NEXT:
        return index + 1 if index < pages else index
    if action == LAST:
        return max(1, pages)
    raise ValueError(f"Unknown page action: {action}. Use one of: {', '.join(PAGE_ACTIONS)}")


def page_slice(view: Sequence[JobRecord], index: int, size: int = PAGE_SIZE) -> List[JobRecord]:
    start = (index - 1) * size
    return list(view[start:start + size])


def show_first_button(index: int, pages: int) -> bool:
    # More than 2 pages and not on page 1 or 2
    return pages > 2 and index > 2


def show_last_button(index: int, pages: int) -> bool:
    # More than 2 pages and not on the last or second-to-last page
    return pages > 2 and index < pages - 1


def page_label(index: int, pages: int) -> str:
    return f"Page {index} of {pages}"
