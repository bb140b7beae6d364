"""Streaming output writers.

Each writer owns the framing of its format and moves through
``UNINITIALIZED -> ACTIVE -> FINALIZED``. The first ``write`` activates it;
``finish`` (normal end) or ``close`` (abort) finalizes it exactly once.
"""

from __future__ import annotations

import csv
import json
from enum import Enum
from typing import Any, Dict, List, Optional

from ...domain.errors import ConfigError
from ...domain.interfaces import OutputWriter
from ...domain.models import sanitize_record, source_fields
from ..logging import get_logger
from .destination import Destination

logger = get_logger("logzio_export.output")


class WriterState(str, Enum):
    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"
    FINALIZED = "finalized"


class StreamingWriter(OutputWriter):
    """Shared state handling for format writers."""

    def __init__(self, destination: Destination) -> None:
        self._dest = destination
        self.state = WriterState.UNINITIALIZED
        self.written = 0

    def write(self, record: Dict[str, Any]) -> None:
        if self.state is WriterState.FINALIZED:
            raise RuntimeError("Writer already finalized")
        first = self.state is WriterState.UNINITIALIZED
        self.state = WriterState.ACTIVE
        self._write_record(record, first)
        self.written += 1

    def finish(self) -> None:
        if self.state is WriterState.FINALIZED:
            return
        self._write_footer()
        self.state = WriterState.FINALIZED
        self._dest.stream.flush()

    def close(self) -> None:
        if self.state is WriterState.FINALIZED:
            return
        self.state = WriterState.FINALIZED
        self._dest.stream.flush()

    def _write_record(self, record: Dict[str, Any], first: bool) -> None:
        raise NotImplementedError

    def _write_footer(self) -> None:
        raise NotImplementedError


class JsonArrayWriter(StreamingWriter):
    """Writes records as one JSON array, one element per line."""

    def _write_record(self, record: Dict[str, Any], first: bool) -> None:
        self._dest.write("[" if first else ",")
        self._dest.write("\n")
        self._dest.write(json.dumps(sanitize_record(record)))

    def _write_footer(self) -> None:
        if self.state is WriterState.UNINITIALIZED:
            self._dest.write("[")
        self._dest.write("]")


def _cell(value: Any) -> Any:
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"))
    return value


class CsvRowWriter(StreamingWriter):
    """Writes the ``_source`` fields of each record as CSV rows.

    The header is fixed by the first record; later rows are projected onto it.
    """

    def __init__(self, destination: Destination) -> None:
        super().__init__(destination)
        self._rows: Optional[csv.DictWriter] = None
        self.header: List[str] = []

    def _write_record(self, record: Dict[str, Any], first: bool) -> None:
        fields = source_fields(sanitize_record(record))
        if self._rows is None:
            self.header = list(fields.keys())
            self._rows = csv.DictWriter(
                self._dest.stream,
                fieldnames=self.header,
                restval="",
                extrasaction="ignore",
                lineterminator="\n",
            )
            self._rows.writeheader()
            logger.info("CSV header: %s", ", ".join(self.header))
        self._rows.writerow({k: _cell(v) for k, v in fields.items()})

    def _write_footer(self) -> None:
        # Nothing to close beyond the flush done by finish()
        pass


WRITERS = {
    "json": JsonArrayWriter,
    "csv": CsvRowWriter,
}


def resolve_format(fmt: str) -> type:
    """Return the writer class for ``fmt``.

    Raises:
        ConfigError: When the format is not recognised.
    """
    key = (fmt or "").strip().lower()
    try:
        return WRITERS[key]
    except KeyError:
        raise ConfigError(f"Unrecognized format: {fmt}") from None


def create_writer(fmt: str, destination: Destination) -> StreamingWriter:
    cls = resolve_format(fmt)
    logger.info("Format configured: %s", fmt)
    return cls(destination)
