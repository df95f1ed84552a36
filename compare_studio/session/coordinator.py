# Path: compare_studio/session/coordinator.py
# Purpose: Connect the background embedding worker to a session.
# Layer: session.
# Details: Tracks pending embed requests and clusters exactly once when a batch is fully answered.

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Set

from compare_studio.core.embedders.worker import (
    EmbeddingResponse,
    EmbeddingWorker,
    EmbedRequest,
    ErrorNotice,
    InitRequest,
    ProgressNotice,
    ReadyNotice,
    WorkerResponse,
)
from compare_studio.core.models.domain import ImageRecord
from .state import SessionState

logger = logging.getLogger(__name__)


class EmbeddingCoordinator:
    """Batch barrier between an :class:`EmbeddingWorker` and a :class:`SessionState`.

    ``submit`` records every requested id in a pending set. Responses drain
    that set, successful or not. Clustering runs once, when the set becomes
    empty; responses arriving after that start no new clustering run.
    """

    def __init__(self, session: SessionState, worker: EmbeddingWorker) -> None:
        self.session = session
        self.worker = worker
        self.pending: Set[str] = set()
        self.ready = False
        self.clustering_runs = 0

    def start(self) -> None:
        """Start the worker thread and send the init handshake."""

        if not self.worker.alive:
            self.worker.start()
        self.session.add_log("Loading AI Model...", "info")
        self.worker.post(InitRequest())

    def submit(self, records: Iterable[ImageRecord]) -> List[str]:
        """Queue embed requests for ``records`` and return the ids now pending."""

        submitted: List[str] = []
        for record in records:
            if record.id in self.pending:
                continue
            self.pending.add(record.id)
            self.worker.post(EmbedRequest(id=record.id, locator=record.locator))
            submitted.append(record.id)
        if submitted:
            logger.debug("Submitted %d embed requests (%d pending)", len(submitted), len(self.pending))
        return submitted

    def handle(self, response: WorkerResponse) -> None:
        """Apply one worker response to the session."""

        if isinstance(response, ProgressNotice):
            self.session.add_log(response.message, "info")
        elif isinstance(response, ReadyNotice):
            self.ready = True
            self.session.add_log(response.message, "success")
        elif isinstance(response, EmbeddingResponse):
            self.session.set_embedding(response.id, response.vector)
            self._resolve(response.id)
        elif isinstance(response, ErrorNotice):
            self.session.add_log(response.message or "Worker error", "error")
            if response.id is not None:
                self._resolve(response.id)
        else:
            logger.warning("Ignoring unknown worker response %r", response)

    def pump(self, timeout: Optional[float] = None) -> int:
        """Handle every response currently queued; wait up to ``timeout`` for the first one.

        Returns the number of responses handled.
        """

        handled = 0
        response = self.worker.poll(timeout)
        while response is not None:
            self.handle(response)
            handled += 1
            response = self.worker.poll()
        return handled

    def wait_for_batch(self, poll_interval: float = 0.05) -> None:
        """Block until the pending set is empty. There is no timeout."""

        while self.pending:
            self.pump(timeout=poll_interval)

    def stop(self) -> None:
        """Terminate the worker; ids still pending are abandoned without clustering."""

        self.worker.terminate()
        if self.pending:
            self.session.add_log(f"Embedding cancelled with {len(self.pending)} image(s) pending.", "warn")
        self.pending.clear()

    def _resolve(self, image_id: str) -> None:
        if image_id not in self.pending:
            return
        self.pending.discard(image_id)
        if not self.pending:
            self.clustering_runs += 1
            self.session.apply_clustering()
