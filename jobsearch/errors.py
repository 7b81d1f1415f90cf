"""Exception types raised by the workbench."""

from typing import Optional

GENERIC_SEARCH_ERROR = "An unexpected error occurred"
GENERIC_BULK_ERROR = "An error occurred while creating job applications."
NO_SELECTION_MESSAGE = "Please select at least one job to create applications."


class JobSearchError(Exception):
    """Base class for workbench errors."""
    pass


class ValidationWarning(JobSearchError):
    """A local precondition failed before anything was sent to the remote."""

    def __init__(self, message: str = NO_SELECTION_MESSAGE):
        super().__init__(message)
        self.message = message


class RemoteError(JobSearchError):
    """
    A remote operation failed.

    ``message`` is the message carried by the failure body, or None when the
    remote did not provide one. Callers pick their own fallback text.
    """

    def __init__(
        self,
        message: Optional[str] = None,
        cause: Optional[BaseException] = None,
        status: Optional[int] = None,
    ):
        super().__init__(message or "Remote operation failed")
        self.message = message
        self.cause = cause
        self.status = status

    def message_or(self, fallback: str) -> str:
        return self.message or fallback
