"""
Value types for the job search workbench.

Everything here is immutable. State transitions build new instances rather
than mutating existing ones.
"""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .normalize import normalize_work_type

# Common work types. Records and criteria may carry others; they pass through.
WORK_TYPES = ("remote", "onsite", "hybrid")

TEXT_COLUMNS = ("title", "salary", "company", "location", "source")
FILTER_COLUMNS = TEXT_COLUMNS + ("work_type",)

SORT_DIRECTIONS = ("asc", "desc")

PAGE_SIZE = 10

REQUIRED_FIELDS = ["id"]


def _is_valid_id(v: Any) -> bool:
    if isinstance(v, bool):
        return False
    if isinstance(v, int):
        return True
    return isinstance(v, str) and v.strip() != ""


def _text(v: Any) -> Optional[str]:
    # Scalars from the wire (numbers, booleans) are kept in string form
    return None if v is None else str(v)


def validate_record(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.

    Only the key is checked: ``id`` must be a non-empty string or an integer.
    Other fields are optional and converted to text by ``JobRecord.from_dict``.
    """
    errors: List[str] = []

    if not isinstance(data, dict):
        return ["Record must be an object"]

    for f in REQUIRED_FIELDS:
        if f not in data:
            errors.append(f"Missing required field: {f}")
        elif not _is_valid_id(data[f]):
            errors.append(f"Field '{f}' must be a non-empty string")

    return errors


@dataclass(frozen=True)
class JobRecord:
    """
    A single search hit. ``id`` is the selection and table key.

    ``raw`` holds the payload the record was built from. It is what
    ``to_dict`` sends back to the mutation endpoint, so fields the workbench
    does not model survive the round trip unchanged.
    """

    id: str
    title: Optional[str] = None
    salary: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    work_type: Optional[str] = None
    source: Optional[str] = None
    raw: Optional[Mapping[str, Any]] = field(default=None, compare=False, repr=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "JobRecord":
        """Build a record from the wire shape. Raises ValueError when invalid."""
        errors = validate_record(data)
        if errors:
            raise ValueError("; ".join(errors))
        work_type = _text(data.get("workType", data.get("work_type")))
        return cls(
            id=str(data["id"]),
            title=_text(data.get("title")),
            salary=_text(data.get("salary")),
            company=_text(data.get("company")),
            location=_text(data.get("location")),
            work_type=normalize_work_type(work_type) if work_type else None,
            source=_text(data.get("source")),
            raw=MappingProxyType(dict(data)),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Wire shape, suitable for resubmission to the mutation endpoint."""
        if self.raw is not None:
            return dict(self.raw)
        return {
            "id": self.id,
            "title": self.title,
            "salary": self.salary,
            "company": self.company,
            "location": self.location,
            "workType": self.work_type,
            "source": self.source,
        }

    def get(self, column: str) -> Optional[str]:
        """Column value by filter/sort name (``workType`` is accepted too)."""
        if column == "workType":
            column = "work_type"
        if column not in FILTER_COLUMNS and column != "id":
            raise ValueError(f"Unknown column: {column}")
        return getattr(self, column)


@dataclass(frozen=True)
class SearchCriteria:
    keywords: str = ""
    location: str = ""
    work_types: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if isinstance(self.work_types, (list, set, frozenset)):
            object.__setattr__(self, "work_types", tuple(self.work_types))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "keywords": self.keywords,
            "location": self.location,
            "workTypes": list(self.work_types),
        }


@dataclass(frozen=True)
class FilterState:
    """Per-column filter values. Empty string means no constraint."""

    title: str = ""
    salary: str = ""
    company: str = ""
    location: str = ""
    work_type: str = ""
    source: str = ""

    def with_column(self, column: str, value: Optional[str]) -> "FilterState":
        if column == "workType":
            column = "work_type"
        if column not in FILTER_COLUMNS:
            raise ValueError(f"Unknown filter column: {column}")
        return replace(self, **{column: value or ""})

    @property
    def is_active(self) -> bool:
        return any(getattr(self, c) for c in FILTER_COLUMNS)


@dataclass(frozen=True)
class SortSpec:
    field: str = "title"
    direction: str = "asc"

    def __post_init__(self) -> None:
        if self.direction not in SORT_DIRECTIONS:
            raise ValueError(f"Sort direction must be 'asc' or 'desc', got {self.direction!r}")


@dataclass(frozen=True)
class PageState:
    index: int = 1
    size: int = PAGE_SIZE


@dataclass(frozen=True)
class SelectionState:
    """Full records currently marked for bulk action, in view order."""

    records: Tuple[JobRecord, ...] = field(default_factory=tuple)

    @property
    def ids(self) -> Tuple[str, ...]:
        return tuple(r.id for r in self.records)

    @property
    def count(self) -> int:
        return len(self.records)

    @property
    def has_selection(self) -> bool:
        return self.count > 0


@dataclass(frozen=True)
class OperationState:
    is_loading: bool = False
    has_error: bool = False
    error_message: Optional[str] = None


@dataclass(frozen=True)
class Notification:
    title: str
    message: str
    variant: str  # success | error | warning


@dataclass(frozen=True)
class BoardOption:
    label: str
    value: str
    description: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BoardOption":
        return cls(
            label=str(data.get("label", "")),
            value=str(data.get("value", "")),
            description=str(data.get("description") or ""),
        )
