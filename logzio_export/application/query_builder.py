from __future__ import annotations

import json
from typing import Any, Dict

from .dto import SearchRequest
from ..domain.errors import ConfigError
from ..domain.models import Query
from ..infrastructure.logging import get_logger

logger = get_logger("logzio_export.query")


def _base_body(size: int) -> Dict[str, Any]:
    return {"sort": [{"@timestamp": {"order": "asc"}}], "size": int(size)}


def simple_search_clause(term: str, start: str, end: str) -> Dict[str, Any]:
    """Build a bool query matching ``term`` within the [start, end] time range."""
    return {
        "bool": {
            "must": [
                {"query_string": {"query": term}},
                {"range": {"@timestamp": {"gte": start, "lte": end}}},
            ]
        }
    }


def parse_raw_query(raw: str) -> Dict[str, Any]:
    """Parse a raw JSON query clause read from stdin.

    Raises:
        ConfigError: When the input is empty, not JSON, or not a JSON object.
    """
    try:
        query = json.loads(raw)
    except (TypeError, json.JSONDecodeError) as exc:
        raise ConfigError(
            "Can't parse JSON query from stdin. Either provide a query or use --search flag"
        ) from exc
    if not isinstance(query, dict):
        raise ConfigError("JSON query from stdin must be an object")
    return query


def build_query(req: SearchRequest) -> Query:
    """Build the immutable search body for the first scroll request."""
    body = _base_body(req.size)
    if req.search:
        logger.info("Searching: %s in time range: %s => %s", req.search, req.start, req.end)
        body["query"] = simple_search_clause(req.search, req.start, req.end)
    else:
        clause = parse_raw_query(req.raw_query or "")
        logger.info("Search query provided:\n%s", json.dumps(clause, indent=2))
        body["query"] = clause

    fields = [f for f in req.extract if f]
    if fields:
        body["_source"] = {"includes": fields}
    return Query(body=body)
