# Path: compare_studio/core/embedders/worker.py
# Purpose: Run an embedder on a background thread behind a request/response message channel.
# Layer: core/embedders.
# Details: Requests and responses are plain dataclasses tagged by ``op``; ids correlate responses with requests.

from __future__ import annotations

import logging
import queue
import threading
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Union

from PIL import Image

from compare_studio.core.models.domain import ImageLocator
from .base import Embedder

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InitRequest:
    op: str = field(default="init", init=False)


@dataclass(frozen=True)
class EmbedRequest:
    id: str
    locator: ImageLocator
    op: str = field(default="embed", init=False)


@dataclass(frozen=True)
class ProgressNotice:
    message: str
    op: str = field(default="progress", init=False)


@dataclass(frozen=True)
class ReadyNotice:
    message: str = "Model ready."
    op: str = field(default="ready", init=False)


@dataclass(frozen=True)
class EmbeddingResponse:
    id: str
    vector: List[float]
    op: str = field(default="embedding", init=False)


@dataclass(frozen=True)
class ErrorNotice:
    """Failure report. ``id`` is set when the failure belongs to one embed request."""

    message: str
    id: Optional[str] = None
    op: str = field(default="error", init=False)


WorkerRequest = Union[InitRequest, EmbedRequest]
WorkerResponse = Union[ProgressNotice, ReadyNotice, EmbeddingResponse, ErrorNotice]

_STOP = object()


class EmbeddingWorker:
    """Background thread that owns an :class:`Embedder` and answers queued requests.

    The caller talks to the worker only through :meth:`post` and
    :meth:`poll`. Requests are handled one at a time in arrival order.
    :meth:`terminate` is the only way to cancel outstanding work.
    """

    def __init__(self, embedder: Embedder, decoder: Callable[[ImageLocator], Image.Image]) -> None:
        self.embedder = embedder
        self.decoder = decoder
        self._requests: "queue.Queue[object]" = queue.Queue()
        self._responses: "queue.Queue[WorkerResponse]" = queue.Queue()
        self._loaded = False
        self._thread = threading.Thread(target=self._run, name=f"embedder-{embedder.name}", daemon=True)

    @property
    def alive(self) -> bool:
        return self._thread.is_alive()

    def start(self) -> None:
        self._thread.start()

    def post(self, request: WorkerRequest) -> None:
        self._requests.put(request)

    def poll(self, timeout: Optional[float] = None) -> Optional[WorkerResponse]:
        """Return the next response, or None if none arrives within ``timeout`` seconds."""

        try:
            if timeout is None:
                return self._responses.get_nowait()
            return self._responses.get(timeout=timeout)
        except queue.Empty:
            return None

    def terminate(self, timeout: Optional[float] = 5.0) -> None:
        """Stop the thread after the request currently being processed; queued requests are dropped."""

        dropped = 0
        while True:
            try:
                self._requests.get_nowait()
                dropped += 1
            except queue.Empty:
                break
        self._requests.put(_STOP)
        if self._thread.is_alive():
            self._thread.join(timeout)
        if dropped:
            logger.info("Embedding worker terminated with %d queued requests dropped", dropped)

    def _run(self) -> None:
        while True:
            request = self._requests.get()
            if request is _STOP:
                break
            try:
                self._handle(request)
            except Exception as exc:  # noqa: BLE001 - reported to the caller as an error notice
                request_id = request.id if isinstance(request, EmbedRequest) else None
                logger.exception("Embedding request %s failed", request_id or getattr(request, "op", "?"))
                self._responses.put(ErrorNotice(message=str(exc) or exc.__class__.__name__, id=request_id))

    def _handle(self, request: object) -> None:
        if isinstance(request, InitRequest):
            self._ensure_loaded()
            self._responses.put(ReadyNotice())
        elif isinstance(request, EmbedRequest):
            self._ensure_loaded()
            image = self.decoder(request.locator)
            vector = self.embedder.embed_image(image)
            self._responses.put(EmbeddingResponse(id=request.id, vector=[float(v) for v in vector]))
        else:
            raise ValueError(f"Unsupported worker request: {request!r}")

    def _ensure_loaded(self) -> None:
        if self._loaded:
            return
        self._responses.put(ProgressNotice("Loading AI model..."))
        self.embedder.load(progress=lambda message: self._responses.put(ProgressNotice(message)))
        self._loaded = True
