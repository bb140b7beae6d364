"""Process shutdown hooks.

Cleanups are registered once, in the order they must run, and each runs at
most one time no matter how many exit paths trigger the registry (explicit
call, ``atexit``, or a termination signal).
"""

from __future__ import annotations

import atexit
import signal
import threading
from typing import Callable, Dict, List, Tuple

from .logging import get_logger

logger = get_logger("logzio_export.shutdown")

HANDLED_SIGNALS = tuple(
    getattr(signal, name) for name in ("SIGINT", "SIGTERM", "SIGHUP") if hasattr(signal, name)
)


class ShutdownHooks:
    def __init__(self) -> None:
        self._hooks: List[Tuple[str, Callable[[], None]]] = []
        self._done: set[str] = set()
        self._previous: Dict[int, object] = {}
        self._installed = False

    def register(self, name: str, callback: Callable[[], None]) -> None:
        if any(n == name for n, _ in self._hooks):
            raise ValueError(f"Shutdown hook already registered: {name}")
        self._hooks.append((name, callback))

    def run(self) -> None:
        """Run every pending hook in registration order."""
        for name, callback in self._hooks:
            if name in self._done:
                continue
            self._done.add(name)
            try:
                callback()
            except Exception:
                logger.exception("Shutdown hook failed: %s", name)

    def install(self) -> None:
        """Attach to ``atexit`` and to termination signals (main thread only)."""
        if self._installed:
            return
        self._installed = True
        atexit.register(self.run)
        if threading.current_thread() is not threading.main_thread():
            return
        for sig in HANDLED_SIGNALS:
            self._previous[sig] = signal.signal(sig, self._on_signal)

    def uninstall(self) -> None:
        if not self._installed:
            return
        self._installed = False
        atexit.unregister(self.run)
        for sig, previous in self._previous.items():
            signal.signal(sig, previous if previous is not None else signal.SIG_DFL)
        self._previous.clear()

    def _on_signal(self, signum, frame) -> None:
        logger.warning("Received signal %d, shutting down", signum)
        self.run()
        raise SystemExit(1)
