from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, TextIO

from ...domain.errors import ConfigError
from ..logging import get_logger

logger = get_logger("logzio_export.output")


class Destination:
    """Single writable sink: a newly created file or the process stdout.

    ``close`` is idempotent; a borrowed stream (stdout) is flushed but never closed.
    """

    def __init__(self, stream: TextIO, path: Optional[Path] = None, owned: bool = False) -> None:
        self.stream = stream
        self.path = path
        self._owned = owned
        self.closed = False

    def write(self, text: str) -> None:
        self.stream.write(text)

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        if self._owned:
            self.stream.close()
        else:
            self.stream.flush()


def check_output_path(path: Path) -> None:
    """Reject any path that already exists, whether file or directory.

    Raises:
        ConfigError: When ``path`` exists.
    """
    if path.is_dir():
        raise ConfigError(f"Directory not a valid output, needs to be a file: {path}")
    if path.exists():
        raise ConfigError(f"File exists: {path}")


def open_destination(output: Optional[str], stdout: Optional[TextIO] = None) -> Destination:
    """Open the export destination; ``None`` selects stdout."""
    if not output:
        logger.info("Outputting to stdout")
        return Destination(stdout or sys.stdout)
    path = Path(output).expanduser()
    logger.info("Output set to: %s", path)
    check_output_path(path)
    try:
        # "x" keeps the create-only guarantee if the path appears after the check
        stream = open(path, "x", encoding="utf-8", newline="")
    except FileExistsError as exc:
        raise ConfigError(f"File exists: {path}") from exc
    except OSError as exc:
        raise ConfigError(f"Cannot open output {path}: {exc}") from exc
    return Destination(stream, path=path, owned=True)
