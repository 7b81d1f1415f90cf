from typing import Iterable

from .models import JobRecord, SelectionState


def set_selection(records: Iterable[JobRecord]) -> SelectionState:
    """Replace the whole selection with ``records``. No diffing is done here."""
    return SelectionState(records=tuple(records))


def clear_selection() -> SelectionState:
    return SelectionState()


def status_text(count: int) -> str:
    # Literal "(s)" regardless of count
    return f"{count} job(s) selected"


def button_label(count: int) -> str:
    if count == 1:
        return "Create 1 Application"
    return f"Create {count} Applications"


def success_message(created: int) -> str:
    if created == 1:
        return "1 job application created successfully!"
    return f"{created} job applications created successfully!"
