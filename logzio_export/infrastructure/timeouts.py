from __future__ import annotations

import os


def http_timeout_seconds() -> float:
    """Per-request HTTP timeout; LOGZIO_HTTP_TIMEOUT overrides the 5s default."""
    try:
        value = float(os.getenv("LOGZIO_HTTP_TIMEOUT", "5"))
    except ValueError:
        return 5.0
    return value if value > 0 else 5.0
