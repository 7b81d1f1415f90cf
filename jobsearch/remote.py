"""
Remote job service.

``HttpJobService`` talks to the search / boards / applications endpoints
with ``requests``. ``AsyncJobService`` exposes the same three operations as
coroutines by running each blocking call in a worker thread, which is the
interface the controllers await.

Every transport or HTTP failure is raised as ``RemoteError``. Its
``message`` is the message carried by the response body, when there is one.
"""

import asyncio
from typing import Any, Iterable, List, Optional, Protocol, Sequence

import requests

from .errors import RemoteError
from .logger import StructuredLogger, get_logger
from .models import BoardOption, JobRecord, SearchCriteria, validate_record
from .retry import RetryError, exponential_backoff


class JobService(Protocol):
    """The remote operations the workbench depends on."""

    async def search(self, criteria: SearchCriteria) -> List[JobRecord]: ...

    async def list_boards(self) -> List[BoardOption]: ...

    async def create_applications(self, records: Sequence[JobRecord]) -> List[str]: ...


def extract_message(response: Optional[requests.Response]) -> Optional[str]:
    """Pull ``message`` (or ``body.message``) out of a JSON error body."""
    if response is None:
        return None
    try:
        data = response.json()
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    body = data.get("body")
    if isinstance(body, dict) and isinstance(body.get("message"), str) and body["message"]:
        return body["message"]
    message = data.get("message")
    if isinstance(message, str) and message:
        return message
    return None


@exponential_backoff(max_retries=2, base_delay=0.5, exceptions=(requests.exceptions.Timeout, requests.exceptions.ConnectionError))
def _get_with_retry(url: str, timeout: float):
    """GET for idempotent lookups, retried on transient errors."""
    return requests.get(url, timeout=timeout)


class HttpJobService:
    """Blocking HTTP client for the job search backend."""

    def __init__(self, base_url: str, timeout: float = 15.0, logger: Optional[StructuredLogger] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.logger = logger or get_logger()

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _send(self, operation: str, method: str, path: str, **kwargs) -> requests.Response:
        url = self._url(path)
        try:
            if method == "GET":
                resp = _get_with_retry(url, self.timeout)
            else:
                resp = requests.post(url, timeout=self.timeout, **kwargs)
            resp.raise_for_status()
            return resp
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            message = extract_message(e.response)
            self.logger.error(f"{operation} request failed", url=url, status=status, detail=message)
            raise RemoteError(message, cause=e, status=status) from e
        except requests.exceptions.Timeout as e:
            self.logger.warning(f"{operation} request timed out", url=url)
            raise RemoteError(None, cause=e) from e
        except RetryError as e:
            self.logger.warning(f"{operation} request failed after retries", url=url, error=str(e))
            raise RemoteError(None, cause=e) from e
        except requests.exceptions.RequestException as e:
            self.logger.error(f"{operation} request error", url=url, error=str(e))
            raise RemoteError(None, cause=e) from e

    def _json(self, operation: str, resp: requests.Response) -> Any:
        try:
            return resp.json()
        except ValueError as e:
            self.logger.error(f"{operation} returned invalid JSON", url=resp.url)
            raise RemoteError(None, cause=e, status=resp.status_code) from e

    def search(self, criteria: SearchCriteria) -> List[JobRecord]:
        resp = self._send("Search", "POST", "jobs/search", json=criteria.to_dict())
        data = self._json("Search", resp)
        if data is None:
            return []
        if not isinstance(data, list):
            self.logger.error("Search returned a non-list payload", type=type(data).__name__)
            raise RemoteError(None, status=resp.status_code)
        return parse_records(data, self.logger)

    def list_boards(self) -> List[BoardOption]:
        resp = self._send("Boards", "GET", "boards")
        data = self._json("Boards", resp) or []
        if not isinstance(data, list):
            raise RemoteError(None, status=resp.status_code)
        return [BoardOption.from_dict(item) for item in data if isinstance(item, dict)]

    def create_applications(self, records: Sequence[JobRecord]) -> List[str]:
        payload = {"jobDataList": [r.to_dict() for r in records]}
        resp = self._send("Create applications", "POST", "applications", json=payload)
        data = self._json("Create applications", resp) or []
        if not isinstance(data, list):
            raise RemoteError(None, status=resp.status_code)
        return [str(app_id) for app_id in data]


def parse_records(items: Iterable[Any], logger: StructuredLogger) -> List[JobRecord]:
    """
    Build records from a search payload.

    Items without a usable ``id`` and repeats of an earlier id are skipped with
    a warning. Every other item is kept, whatever its field values.
    """
    records: List[JobRecord] = []
    seen = set()
    for item in items:
        errors = validate_record(item)
        if errors:
            logger.warning("Skipping invalid record", errors=errors)
            continue
        record = JobRecord.from_dict(item)
        if record.id in seen:
            logger.warning("Skipping duplicate record id", id=record.id)
            continue
        seen.add(record.id)
        records.append(record)
    return records


class AsyncJobService:
    """Coroutine facade over a blocking service; each call runs in a thread."""

    def __init__(self, service: HttpJobService):
        self.service = service

    async def search(self, criteria: SearchCriteria) -> List[JobRecord]:
        return await asyncio.to_thread(self.service.search, criteria)

    async def list_boards(self) -> List[BoardOption]:
        return await asyncio.to_thread(self.service.list_boards)

    async def create_applications(self, records: Sequence[JobRecord]) -> List[str]:
        return await asyncio.to_thread(self.service.create_applications, list(records))
