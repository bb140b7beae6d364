from __future__ import annotations

from typing import Optional


class ConfigError(ValueError):
    """Raised when user-supplied configuration is missing or invalid."""


class TransportError(RuntimeError):
    """Raised when the search backend call fails or returns a non-success status.

    Fields:
        status: HTTP status reported by the backend (None when no response arrived).
        body: Backend error payload, surfaced verbatim.
    """

    def __init__(self, status: Optional[int], body: object) -> None:
        self.status = status
        self.body = body
        if status is None:
            super().__init__(f"Search request failed: {body}")
        else:
            super().__init__(f"Unexpected status code received: {status}")
