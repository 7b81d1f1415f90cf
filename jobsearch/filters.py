"""Column filters applied to the base collection of a search."""

from typing import List, Sequence

from .models import TEXT_COLUMNS, FilterState, JobRecord
from .normalize import contains_ci


def apply_filters(base: Sequence[JobRecord], filters: FilterState) -> List[JobRecord]:
    """
    Return the records of ``base`` matching every active column filter.

    Text columns match case-insensitively on substring; ``work_type`` is an
    exact match. Relative order is preserved and ``base`` is never modified.
    """
    filtered = list(base)

    for column in TEXT_COLUMNS:
        needle = getattr(filters, column)
        if needle:
            filtered = [r for r in filtered if contains_ci(getattr(r, column), needle)]

    if filters.work_type:
        filtered = [r for r in filtered if r.work_type == filters.work_type]

    return filtered


def clear_filters() -> FilterState:
    return FilterState()
