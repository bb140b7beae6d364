from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional
from ..domain.models import Query


@dataclass(frozen=True)
class SearchRequest:
    search: Optional[str] = None
    raw_query: Optional[str] = None
    start: str = "now-5m"
    end: str = "now"
    extract: List[str] = field(default_factory=list)
    size: int = 1000


@dataclass(frozen=True)
class ExportRequest:
    query: Query


@dataclass(frozen=True)
class ExportResult:
    exported: int
    total: int
    calls: int
