"""
Typed messages dispatched into the workbench reducer.

View commands describe a user interaction. Lifecycle messages describe the
progress of a remote operation and are produced by the controllers only.
"""

from dataclasses import dataclass
from typing import Tuple

from .models import BoardOption, JobRecord, SearchCriteria


# View commands

@dataclass(frozen=True)
class KeywordsChanged:
    value: str


@dataclass(frozen=True)
class LocationChanged:
    value: str


@dataclass(frozen=True)
class WorkTypesChanged:
    values: Tuple[str, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.values, tuple):
            object.__setattr__(self, "values", tuple(self.values))


@dataclass(frozen=True)
class CriteriaChanged:
    """Replace all search inputs at once."""

    criteria: SearchCriteria


@dataclass(frozen=True)
class SearchRequested:
    pass


@dataclass(frozen=True)
class ColumnFilterChanged:
    column: str
    value: str


@dataclass(frozen=True)
class ClearFiltersRequested:
    pass


@dataclass(frozen=True)
class SortRequested:
    field: str
    direction: str = "asc"


@dataclass(frozen=True)
class PageNavigationRequested:
    action: str  # first | previous | next | last


@dataclass(frozen=True)
class SelectionChanged:
    records: Tuple[JobRecord, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.records, tuple):
            object.__setattr__(self, "records", tuple(self.records))


@dataclass(frozen=True)
class BulkSubmitRequested:
    pass


# Remote operation lifecycle

@dataclass(frozen=True)
class SearchStarted:
    epoch: int


@dataclass(frozen=True)
class SearchSucceeded:
    epoch: int
    records: Tuple[JobRecord, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.records, tuple):
            object.__setattr__(self, "records", tuple(self.records))


@dataclass(frozen=True)
class SearchFailed:
    epoch: int
    message: str


@dataclass(frozen=True)
class BoardsLoaded:
    boards: Tuple[BoardOption, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.boards, tuple):
            object.__setattr__(self, "boards", tuple(self.boards))


@dataclass(frozen=True)
class BulkSubmitStarted:
    pass


@dataclass(frozen=True)
class BulkSubmitSucceeded:
    application_ids: Tuple[str, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.application_ids, tuple):
            object.__setattr__(self, "application_ids", tuple(self.application_ids))


@dataclass(frozen=True)
class BulkSubmitFailed:
    message: str

