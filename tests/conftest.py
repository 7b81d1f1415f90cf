"""
Pytest configuration and shared fixtures.
"""

import asyncio
from typing import Any, Dict, List

import pytest

from jobsearch.config import Settings
from jobsearch.controller import Workbench
from jobsearch.logger import get_logger, reset_logger
from jobsearch.models import JobRecord


class FakeJobService:
    """In-memory stand-in for the remote job service."""

    def __init__(self, results=None, applications=None, boards=None):
        self.results = results if results is not None else []
        self.applications = applications if applications is not None else []
        self.boards = boards if boards is not None else []
        self.search_error = None
        self.create_error = None
        self.boards_error = None
        self.search_calls = []
        self.create_calls = []

    async def search(self, criteria):
        self.search_calls.append(criteria)
        if self.search_error is not None:
            raise self.search_error
        return list(self.results)

    async def list_boards(self):
        if self.boards_error is not None:
            raise self.boards_error
        return list(self.boards)

    async def create_applications(self, records):
        self.create_calls.append(list(records))
        if self.create_error is not None:
            raise self.create_error
        return list(self.applications)


@pytest.fixture(autouse=True)
def quiet_logger(tmp_path):
    """Route the global logger to a temp dir with console output off."""
    reset_logger()
    logger = get_logger(log_dir=tmp_path / "logs", enable_console=False)
    yield logger
    reset_logger()


@pytest.fixture
def job_dicts() -> List[Dict[str, Any]]:
    """Wire-shaped search results."""
    return [
        {
            "id": "1",
            "title": "Senior Developer",
            "salary": "$95,000",
            "company": "TechCorp",
            "location": "Toronto",
            "workType": "remote",
            "source": "LinkedIn",
        },
        {
            "id": "2",
            "title": "Frontend Developer",
            "salary": "$75,000",
            "company": "WebCorp",
            "location": "Montreal",
            "workType": "hybrid",
            "source": "Indeed",
        },
        {
            "id": "3",
            "title": "data analyst",
            "salary": None,
            "company": "Numbers Inc",
            "location": "Toronto",
            "workType": "onsite",
            "source": "Indeed",
        },
    ]


@pytest.fixture
def records(job_dicts) -> List[JobRecord]:
    return [JobRecord.from_dict(d) for d in job_dicts]


@pytest.fixture
def many_records() -> List[JobRecord]:
    """25 records, enough for three pages."""
    return [
        JobRecord(
            id=str(i),
            title=f"Job {i:02d}",
            company="Acme" if i % 2 else "Beta",
            location="Remote",
            work_type="remote" if i % 3 else "onsite",
            source="LinkedIn",
        )
        for i in range(1, 26)
    ]


@pytest.fixture
def service() -> FakeJobService:
    return FakeJobService()


@pytest.fixture
def workbench(service, quiet_logger) -> Workbench:
    return Workbench(service, settings=Settings(), logger=quiet_logger)


def run(coro):
    return asyncio.run(coro)
