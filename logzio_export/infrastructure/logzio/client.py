from __future__ import annotations

import json
from typing import Any, Dict, Optional
import requests

from ...domain.errors import TransportError
from ...domain.interfaces import SearchBackend
from ...domain.models import Batch, Query
from ..logging import get_logger
from ..timeouts import http_timeout_seconds

logger = get_logger("logzio_export.logzio")

SCROLL_ENDPOINT = "/v1/scroll"


def _parse_total(raw: Any) -> int:
    # Elasticsearch 7+ reports {"value": n, "relation": "eq"}
    if isinstance(raw, dict):
        raw = raw.get("value", 0)
    try:
        return int(raw or 0)
    except (TypeError, ValueError):
        return 0


def parse_scroll_response(data: Dict[str, Any]) -> Batch:
    """Convert a /v1/scroll response body into a Batch.

    The ``hits`` member is a JSON-encoded string holding ``total`` and ``hits``;
    an already-decoded object is accepted as well.
    """
    hits = data.get("hits") or {}
    if isinstance(hits, str):
        try:
            hits = json.loads(hits)
        except json.JSONDecodeError as exc:
            raise TransportError(None, f"Malformed hits payload: {exc}") from exc
    records = hits.get("hits") or []
    cursor = data.get("scrollId") or data.get("scroll_id")
    return Batch(records=list(records), total=_parse_total(hits.get("total")), cursor=cursor)


def _error_body(resp: requests.Response) -> object:
    try:
        return resp.json()
    except ValueError:
        return resp.text


class LogzioScrollClient(SearchBackend):
    """Search backend adapter for the Logz.io scroll REST API."""

    def __init__(self, base_url: str, api_token: str, session: Optional[requests.Session] = None) -> None:
        self._url = f"{base_url.rstrip('/')}{SCROLL_ENDPOINT}"
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "content-type": "application/json",
                "accept": "application/json",
                "accept-encoding": "gzip, deflate",
                "x-api-token": api_token,
            }
        )

    def next_batch(self, query: Query, cursor: Optional[str] = None) -> Batch:
        body = {"scroll_id": cursor} if cursor else query.body
        timeout = http_timeout_seconds()
        try:
            r = self._session.post(self._url, json=body, timeout=timeout)
        except requests.RequestException as exc:
            raise TransportError(None, str(exc)) from exc
        if not r.ok:
            raise TransportError(r.status_code, _error_body(r))
        try:
            data = r.json() or {}
        except ValueError as exc:
            raise TransportError(r.status_code, r.text) from exc
        batch = parse_scroll_response(data)
        logger.debug("Scroll response | status=%d | hits=%d", r.status_code, len(batch))
        return batch

    def close(self) -> None:
        self._session.close()
