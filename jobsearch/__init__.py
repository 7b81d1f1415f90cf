__version__ = "0.1.0"

from .controller import BulkActionExecutor, SearchController, Workbench
from .errors import JobSearchError, RemoteError, ValidationWarning
from .models import JobRecord, Notification, SearchCriteria
from .state import WorkbenchState, reduce

__all__ = [
    "__version__",
    "BulkActionExecutor",
    "JobRecord",
    "JobSearchError",
    "Notification",
    "RemoteError",
    "SearchController",
    "SearchCriteria",
    "ValidationWarning",
    "Workbench",
    "WorkbenchState",
    "reduce",
]
