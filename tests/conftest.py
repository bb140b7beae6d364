"""
Pytest configuration and fixtures for log export tests.

Provides scripted search backends, hit factories and environment isolation.
"""

from typing import List, Optional
from unittest.mock import Mock
import pytest

from logzio_export.domain.errors import TransportError
from logzio_export.domain.interfaces import ProgressReporter, SearchBackend
from logzio_export.domain.models import Batch, Query


def make_hit(n: int, **source) -> dict:
    """Build a Logz.io-style hit with transport metadata attached."""
    body = {"message": f"log line {n}", "@timestamp": f"2024-01-01T00:00:{n % 60:02d}Z"}
    body.update(source)
    return {"_index": "logz-abc", "_id": str(n), "_score": 1.0, "sort": [n], "_source": body}


class ScriptedBackend(SearchBackend):
    """In-process backend that replays a fixed sequence of batches."""

    def __init__(self, batches: List[Batch], fail_at: Optional[int] = None) -> None:
        self.batches = list(batches)
        self.fail_at = fail_at
        self.calls: List[tuple] = []
        self.closed = False

    def next_batch(self, query: Query, cursor: Optional[str] = None) -> Batch:
        self.calls.append((query, cursor))
        index = len(self.calls) - 1
        if self.fail_at is not None and index == self.fail_at:
            raise TransportError(500, {"message": "scroll expired"})
        if index >= len(self.batches):
            raise AssertionError("backend called after the traversal ended")
        return self.batches[index]

    def close(self) -> None:
        self.closed = True


def scripted_batches(sizes: List[int], total: Optional[int] = None, cursor: str = "scroll-1") -> List[Batch]:
    """Batches of the given sizes followed by the terminal empty batch."""
    total = sum(sizes) if total is None else total
    out: List[Batch] = []
    n = 0
    for size in sizes:
        out.append(Batch(records=[make_hit(n + i) for i in range(size)], total=total, cursor=cursor))
        n += size
    out.append(Batch(records=[], total=total, cursor=cursor))
    return out


@pytest.fixture
def hit_factory():
    return make_hit


@pytest.fixture
def batch_factory():
    return scripted_batches


@pytest.fixture
def backend_factory():
    return ScriptedBackend


@pytest.fixture
def sample_query():
    return Query(body={"sort": [{"@timestamp": {"order": "asc"}}], "size": 1000, "query": {"match_all": {}}})


@pytest.fixture
def mock_progress():
    """Mock progress reporter for testing."""
    return Mock(spec=ProgressReporter)


@pytest.fixture
def clean_environment(monkeypatch):
    """Clean environment variables for testing."""
    env_vars_to_clean = [
        'LOGZIO_API_TOKEN',
        'LOGZIO_API_REGION',
        'LOGZIO_API_URL',
        'LOGZIO_HTTP_TIMEOUT',
        'LOGZIO_SCROLL_SIZE',
    ]
    for var in env_vars_to_clean:
        monkeypatch.delenv(var, raising=False)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as unit test"
    )
    config.addinivalue_line(
        "markers", "cli: mark test as CLI command test"
    )
    config.addinivalue_line(
        "markers", "env: mark test as environment resolution test"
    )
