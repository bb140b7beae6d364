from __future__ import annotations

import time
from typing import Callable

from ..dto import ExportRequest, ExportResult
from ...domain.interfaces import OutputWriter, ProgressReporter, SearchBackend
from ...domain.models import ExportSession
from ...infrastructure.logging import get_logger

logger = get_logger("logzio_export.export")


def throughput(offset: int, elapsed_seconds: float) -> int:
    """Records per whole elapsed second; the raw offset while under one second."""
    whole = int(elapsed_seconds)
    return offset // whole if whole > 0 else offset


class ExportLogsUseCase:
    """Use-case: scroll through every match and stream each record to the writer.

    The traversal ends on the first empty batch, never on the reported total.
    Transport errors propagate untouched and leave the writer unfinished.
    """

    def __init__(
        self,
        backend: SearchBackend,
        writer: OutputWriter,
        progress: ProgressReporter,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._backend = backend
        self._writer = writer
        self._progress = progress
        self._clock = clock
        self.session = ExportSession(started_at=clock())

    def execute(self, req: ExportRequest) -> ExportResult:
        session = self.session
        while True:
            batch = self._backend.next_batch(req.query, session.cursor)
            first = not session.started
            session.calls += 1
            if first:
                session.total = batch.total
                self._progress.start(batch.total)
            if batch.cursor:
                session.cursor = batch.cursor

            for record in batch.records:
                self._writer.write(record)
                session.offset += 1

            speed = throughput(session.offset, self._clock() - session.started_at)
            self._progress.update(session.offset, speed)
            logger.debug("Batch %d | size=%d | offset=%d", session.calls, len(batch), session.offset)

            if len(batch) == 0:
                break

        self._writer.finish()
        logger.info("Export completed | calls=%d | exported=%d", session.calls, session.offset)
        return ExportResult(exported=session.offset, total=session.total, calls=session.calls)
