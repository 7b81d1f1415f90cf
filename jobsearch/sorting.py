from typing import List, Sequence

from .models import SORT_DIRECTIONS, JobRecord
from .normalize import sort_key


def sort_records(view: Sequence[JobRecord], field: str, direction: str = "asc") -> List[JobRecord]:
    """
    Stable single-key sort on the lower-cased string form of ``field``.

    Descending order inverts the comparison only, so records with equal keys
    keep their incoming relative order in both directions. ``sorted`` with
    ``reverse=True`` already guarantees that.
    """
    if direction not in SORT_DIRECTIONS:
        raise ValueError(f"Sort direction must be 'asc' or 'desc', got {direction!r}")
    return sorted(view, key=lambda r: sort_key(r.get(field)), reverse=direction == "desc")
