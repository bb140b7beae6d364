from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from .models import Batch, Query


class SearchBackend(ABC):
    """Port for the paginated search service (e.g., Logz.io scroll API)."""

    @abstractmethod
    def next_batch(self, query: Query, cursor: Optional[str] = None) -> Batch:
        """Fetch the next batch of matches.

        The query is sent when ``cursor`` is None; otherwise only the cursor is
        sent and the query is ignored.

        Raises:
            TransportError: The request failed or returned a non-success status.
        """
        raise NotImplementedError


class OutputWriter(ABC):
    """Port for streaming serialisation of records to a destination."""

    @abstractmethod
    def write(self, record: Dict[str, Any]) -> None:
        """Serialise one record (transport metadata already present or not)."""
        raise NotImplementedError

    @abstractmethod
    def finish(self) -> None:
        """Write closing framing and flush. Safe to call more than once."""
        raise NotImplementedError

    @abstractmethod
    def close(self) -> None:
        """Flush without closing framing (abort path). Safe to call more than once."""
        raise NotImplementedError


class ProgressReporter(ABC):
    """Port for the live progress indicator."""

    @abstractmethod
    def start(self, total: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def update(self, offset: int, speed: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def stop(self) -> None:
        raise NotImplementedError
