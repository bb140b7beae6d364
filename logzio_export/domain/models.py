from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

# Transport-only hit fields never written to output
TRANSPORT_FIELDS = ("_score", "sort")


@dataclass(frozen=True)
class Query:
    """Request body understood by the search backend.

    Fields:
        body: Full search body (sort, size, query and optional _source).
    """
    body: Dict[str, Any]


@dataclass(frozen=True)
class Batch:
    """One page of matched records.

    Fields:
        records: Hits in backend sort order.
        total: Total match count; only meaningful on the first batch.
        cursor: Scroll token to continue the traversal, if returned.
    """
    records: List[Dict[str, Any]]
    total: int = 0
    cursor: Optional[str] = None

    def __len__(self) -> int:
        return len(self.records)


@dataclass
class ExportSession:
    """Mutable traversal state owned by the scroll driver."""
    cursor: Optional[str] = None
    offset: int = 0
    total: int = 0
    calls: int = 0
    started_at: float = field(default_factory=time.monotonic)

    @property
    def started(self) -> bool:
        return self.calls > 0


def sanitize_record(record: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``record`` without transport metadata."""
    return {k: v for k, v in record.items() if k not in TRANSPORT_FIELDS}


def source_fields(record: Mapping[str, Any]) -> Dict[str, Any]:
    """Return the ``_source`` sub-mapping of a hit (empty when absent)."""
    src = record.get("_source")
    return dict(src) if isinstance(src, Mapping) else {}
