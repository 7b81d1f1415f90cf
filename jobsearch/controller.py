"""
Controllers driving the workbench state through remote operations.

``Workbench`` owns the current ``WorkbenchState`` and routes view commands:
pure commands go straight through the reducer, ``SearchRequested`` goes to
the ``SearchController`` and ``BulkSubmitRequested`` to the
``BulkActionExecutor``. Both controllers await the remote service and then
dispatch lifecycle messages back into the reducer.

Overlapping searches are not rejected. Responses are applied in the order
they resolve (last write wins) unless ``Settings.discard_stale_responses``
is set, in which case a response overtaken by a newer search is dropped.
"""

from collections import deque
from typing import Callable, Deque, List, Optional

from . import commands as cmd
from .config import Settings
from .errors import (
    GENERIC_BULK_ERROR,
    GENERIC_SEARCH_ERROR,
    RemoteError,
    ValidationWarning,
)
from .logger import StructuredLogger, get_logger
from .models import Notification, SearchCriteria, SelectionState
from .remote import JobService
from .selection import success_message
from .state import WorkbenchState, reduce

NotificationListener = Callable[[Notification], None]

# Oldest notifications are dropped past this many
MAX_NOTIFICATIONS = 50


class SearchController:
    """Runs searches and applies their outcome to the workbench."""

    def __init__(self, workbench: "Workbench"):
        self.workbench = workbench

    async def search(self, criteria: Optional[SearchCriteria] = None) -> WorkbenchState:
        wb = self.workbench
        if criteria is not None:
            wb.apply(cmd.CriteriaChanged(criteria))
        criteria = wb.state.criteria

        epoch = wb.state.search_epoch + 1
        wb.apply(cmd.SearchStarted(epoch))
        wb.logger.record_search_attempt()
        wb.logger.info("Search started", epoch=epoch, **criteria.to_dict())

        try:
            records = await wb.service.search(criteria)
        except RemoteError as e:
            message = e.message_or(GENERIC_SEARCH_ERROR)
            wb.logger.record_search_failure(type(e.cause).__name__ if e.cause else "RemoteError")
            wb.logger.error("Search failed", epoch=epoch, status=e.status, detail=message)
            return self._resolve(epoch, cmd.SearchFailed(epoch, message))
        except Exception as e:
            wb.logger.record_search_failure(type(e).__name__)
            wb.logger.error("Search failed unexpectedly", epoch=epoch, error=repr(e))
            return self._resolve(epoch, cmd.SearchFailed(epoch, GENERIC_SEARCH_ERROR))

        records = list(records or [])
        wb.logger.record_search_success(len(records))
        wb.logger.info("Search finished", epoch=epoch, count=len(records))
        return self._resolve(epoch, cmd.SearchSucceeded(epoch, tuple(records)))

    def _resolve(self, epoch: int, outcome) -> WorkbenchState:
        wb = self.workbench
        if wb.settings.discard_stale_responses and epoch != wb.state.search_epoch:
            wb.logger.info("Discarding stale search response", epoch=epoch, latest=wb.state.search_epoch)
            return wb.state
        return wb.apply(outcome)

    async def load_boards(self) -> WorkbenchState:
        """Fetch board options. A failure leaves the list empty."""
        wb = self.workbench
        try:
            boards = await wb.service.list_boards()
        except RemoteError as e:
            wb.logger.warning("Board lookup failed", status=e.status, detail=e.message)
            return wb.state
        except Exception as e:
            wb.logger.warning("Board lookup failed unexpectedly", error=repr(e))
            return wb.state
        return wb.apply(cmd.BoardsLoaded(tuple(boards)))


class BulkActionExecutor:
    """Submits the current selection to the application endpoint."""

    def __init__(self, workbench: "Workbench"):
        self.workbench = workbench

    @staticmethod
    def validate(selection: SelectionState) -> None:
        if not selection.has_selection:
            raise ValidationWarning()

    async def submit(self) -> Notification:
        wb = self.workbench
        selection = wb.state.selection
        try:
            self.validate(selection)
        except ValidationWarning as w:
            wb.logger.warning("Bulk submit with empty selection")
            return wb.notify(Notification("No Jobs Selected", w.message, "warning"))

        wb.apply(cmd.BulkSubmitStarted())
        wb.logger.info("Creating applications", count=selection.count, ids=list(selection.ids))

        try:
            app_ids = await wb.service.create_applications(list(selection.records))
        except RemoteError as e:
            message = e.message_or(GENERIC_BULK_ERROR)
            wb.logger.record_bulk_failure(type(e.cause).__name__ if e.cause else "RemoteError")
            wb.logger.error("Creating applications failed", status=e.status, detail=message)
            wb.apply(cmd.BulkSubmitFailed(message))
            return wb.notify(Notification("Error", message, "error"))
        except Exception as e:
            wb.logger.record_bulk_failure(type(e).__name__)
            wb.logger.error("Creating applications failed unexpectedly", error=repr(e))
            wb.apply(cmd.BulkSubmitFailed(GENERIC_BULK_ERROR))
            return wb.notify(Notification("Error", GENERIC_BULK_ERROR, "error"))

        app_ids = list(app_ids or [])
        wb.apply(cmd.BulkSubmitSucceeded(tuple(app_ids)))
        wb.logger.record_applications_created(len(app_ids))
        wb.logger.info("Applications created", application_ids=app_ids)
        return wb.notify(Notification("Success", success_message(len(app_ids)), "success"))


class Workbench:
    """State holder and command router for one search-result session."""

    def __init__(
        self,
        service: JobService,
        settings: Optional[Settings] = None,
        logger: Optional[StructuredLogger] = None,
    ):
        self.service = service
        self.settings = settings or Settings()
        self.logger = logger or get_logger()
        self.state = WorkbenchState()
        self.notifications: Deque[Notification] = deque(maxlen=MAX_NOTIFICATIONS)
        self._listeners: List[NotificationListener] = []
        self.search_controller = SearchController(self)
        self.bulk_executor = BulkActionExecutor(self)

    def apply(self, message) -> WorkbenchState:
        self.state = reduce(self.state, message)
        return self.state

    def subscribe(self, listener: NotificationListener) -> None:
        self._listeners.append(listener)

    def notify(self, notification: Notification) -> Notification:
        self.notifications.append(notification)
        for listener in self._listeners:
            listener(notification)
        return notification

    def send(self, command) -> WorkbenchState:
        """Apply a synchronous view command."""
        if isinstance(command, (cmd.SearchRequested, cmd.BulkSubmitRequested)):
            raise TypeError(f"{type(command).__name__} must be dispatched with 'await dispatch(...)'")
        return self.apply(command)

    async def dispatch(self, command) -> WorkbenchState:
        """Apply any view command, awaiting remote work where needed."""
        if isinstance(command, cmd.SearchRequested):
            return await self.search_controller.search()
        if isinstance(command, cmd.BulkSubmitRequested):
            await self.bulk_executor.submit()
            return self.state
        return self.apply(command)

    async def search(self, criteria: Optional[SearchCriteria] = None) -> WorkbenchState:
        return await self.search_controller.search(criteria)

    async def submit(self) -> Notification:
        return await self.bulk_executor.submit()

    async def load_boards(self) -> WorkbenchState:
        return await self.search_controller.load_boards()
