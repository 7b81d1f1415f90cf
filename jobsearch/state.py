"""
Workbench state record and its reducer.

``WorkbenchState`` is a frozen snapshot of everything the view renders.
``reduce`` is the only place a new snapshot is produced: it takes the
current snapshot and one message from ``commands`` and returns the next
snapshot. It never performs I/O.

Invariants kept by every transition:
- ``base`` only changes on SearchStarted / SearchSucceeded.
- ``view`` is always the filtered (and, once requested, sorted) base.
- ``page.index`` stays within [1, max(1, total_pages)] and goes back to 1
  on any filter or sort change.
- ``selection`` is cleared only on SearchStarted and BulkSubmitSucceeded.
- ``has_searched`` never goes back to False.
"""

from dataclasses import dataclass, field, replace
from typing import List, Tuple

from . import commands as cmd
from . import paging
from .filters import apply_filters, clear_filters
from .models import (
    FILTER_COLUMNS,
    BoardOption,
    FilterState,
    JobRecord,
    OperationState,
    PageState,
    SearchCriteria,
    SelectionState,
    SortSpec,
)
from .selection import button_label, clear_selection, set_selection, status_text
from .sorting import sort_records

EMPTY_RESULTS_MESSAGE = "No jobs found for your search."
NO_FILTERED_RESULTS_MESSAGE = "No jobs match the current filters."

SORTABLE_FIELDS = FILTER_COLUMNS + ("workType",)


@dataclass(frozen=True)
class WorkbenchState:
    criteria: SearchCriteria = field(default_factory=SearchCriteria)
    base: Tuple[JobRecord, ...] = ()
    view: Tuple[JobRecord, ...] = ()
    filters: FilterState = field(default_factory=FilterState)
    sort: SortSpec = field(default_factory=SortSpec)
    sort_applied: bool = False
    page: PageState = field(default_factory=PageState)
    selection: SelectionState = field(default_factory=SelectionState)
    search_op: OperationState = field(default_factory=OperationState)
    bulk_op: OperationState = field(default_factory=OperationState)
    has_searched: bool = False
    search_epoch: int = 0
    boards: Tuple[BoardOption, ...] = ()

    # Result area

    @property
    def has_results(self) -> bool:
        return len(self.view) > 0 and not self.search_op.is_loading

    @property
    def has_search_results(self) -> bool:
        return len(self.base) > 0 and not self.search_op.is_loading

    @property
    def is_empty(self) -> bool:
        """Searched, finished, no error, and nothing came back."""
        return (
            not self.search_op.is_loading
            and self.has_searched
            and len(self.base) == 0
            and not self.search_op.has_error
        )

    @property
    def empty_message(self) -> str:
        return EMPTY_RESULTS_MESSAGE

    @property
    def no_filtered_results(self) -> bool:
        return self.has_search_results and len(self.view) == 0

    # Paging

    @property
    def total_pages(self) -> int:
        return paging.total_pages(len(self.view), self.page.size)

    @property
    def paged_records(self) -> List[JobRecord]:
        return paging.page_slice(self.view, self.page.index, self.page.size)

    @property
    def is_first_page(self) -> bool:
        return self.page.index == 1

    @property
    def is_last_page(self) -> bool:
        return self.page.index == self.total_pages

    @property
    def show_first_button(self) -> bool:
        return paging.show_first_button(self.page.index, self.total_pages)

    @property
    def show_last_button(self) -> bool:
        return paging.show_last_button(self.page.index, self.total_pages)

    @property
    def page_label(self) -> str:
        return paging.page_label(self.page.index, self.total_pages)

    # Selection

    @property
    def selected_count(self) -> int:
        return self.selection.count

    @property
    def has_selection(self) -> bool:
        return self.selection.has_selection

    @property
    def selection_status(self) -> str:
        return status_text(self.selection.count)

    @property
    def create_button_label(self) -> str:
        return button_label(self.selection.count)


def derive_view(state: WorkbenchState) -> Tuple[JobRecord, ...]:
    view = apply_filters(state.base, state.filters)
    if state.sort_applied:
        view = sort_records(view, state.sort.field, state.sort.direction)
    return tuple(view)


def _recompute(state: WorkbenchState) -> WorkbenchState:
    return replace(state, view=derive_view(state), page=replace(state.page, index=1))


def reduce(state: WorkbenchState, message) -> WorkbenchState:
    """Return the state that follows ``state`` after ``message``."""

    # Search inputs
    if isinstance(message, cmd.KeywordsChanged):
        return replace(state, criteria=replace(state.criteria, keywords=message.value or ""))

    if isinstance(message, cmd.LocationChanged):
        return replace(state, criteria=replace(state.criteria, location=message.value or ""))

    if isinstance(message, cmd.WorkTypesChanged):
        return replace(state, criteria=replace(state.criteria, work_types=message.values))

    if isinstance(message, cmd.CriteriaChanged):
        return replace(state, criteria=message.criteria)

    # Search lifecycle
    if isinstance(message, cmd.SearchStarted):
        return replace(
            state,
            base=(),
            view=(),
            filters=clear_filters(),
            sort=SortSpec(),
            sort_applied=False,
            page=PageState(),
            selection=clear_selection(),
            search_op=OperationState(is_loading=True),
            has_searched=True,
            search_epoch=message.epoch,
        )

    if isinstance(message, cmd.SearchSucceeded):
        return replace(
            state,
            base=message.records,
            view=message.records,
            filters=clear_filters(),
            sort=SortSpec(),
            sort_applied=False,
            page=PageState(),
            search_op=replace(state.search_op, is_loading=False),
        )

    if isinstance(message, cmd.SearchFailed):
        return replace(
            state,
            search_op=OperationState(
                is_loading=False,
                has_error=True,
                error_message=message.message,
            ),
        )

    if isinstance(message, cmd.BoardsLoaded):
        return replace(state, boards=message.boards)

    # Filters and sorting
    if isinstance(message, cmd.ColumnFilterChanged):
        value = message.value or ""
        return _recompute(replace(state, filters=state.filters.with_column(message.column, value)))

    if isinstance(message, cmd.ClearFiltersRequested):
        return _recompute(replace(state, filters=clear_filters()))

    if isinstance(message, cmd.SortRequested):
        if message.field not in SORTABLE_FIELDS:
            raise ValueError(f"Unknown sort field: {message.field}")
        sort = SortSpec(field=message.field, direction=message.direction)
        return _recompute(replace(state, sort=sort, sort_applied=True))

    # Paging
    if isinstance(message, cmd.PageNavigationRequested):
        index = paging.navigate(state.page.index, state.total_pages, message.action)
        return replace(state, page=replace(state.page, index=index))

    # Selection and bulk action
    if isinstance(message, cmd.SelectionChanged):
        return replace(state, selection=set_selection(message.records))

    if isinstance(message, cmd.BulkSubmitStarted):
        return replace(state, bulk_op=OperationState(is_loading=True))

    if isinstance(message, cmd.BulkSubmitSucceeded):
        return replace(state, selection=clear_selection(), bulk_op=OperationState())

    if isinstance(message, cmd.BulkSubmitFailed):
        return replace(
            state,
            bulk_op=OperationState(is_loading=False, has_error=True, error_message=message.message),
        )

    raise TypeError(f"{type(message).__name__} is not a state transition")
