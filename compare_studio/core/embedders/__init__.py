# Path: compare_studio/core/embedders/__init__.py
# Purpose: Package initializer for embedder implementations and interfaces.
# Layer: core/embedders.
# Details: Exposes the base interface, reference implementations, factory, and background worker channel.

from .base import Embedder
from .clip_embedder import ClipEmbedder
from .factory import create_embedder
from .thumbnail_embedder import ThumbnailEmbedder
from .worker import (
    EmbeddingResponse,
    EmbeddingWorker,
    EmbedRequest,
    ErrorNotice,
    InitRequest,
    ProgressNotice,
    ReadyNotice,
)

__all__ = [
    "ClipEmbedder",
    "EmbedRequest",
    "Embedder",
    "EmbeddingResponse",
    "EmbeddingWorker",
    "ErrorNotice",
    "InitRequest",
    "ProgressNotice",
    "ReadyNotice",
    "ThumbnailEmbedder",
    "create_embedder",
]
