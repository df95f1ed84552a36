# Path: compare_studio/core/embedders/factory.py
# Purpose: Build the configured embedder implementation.
# Layer: core/embedders.
# Details: Maps EmbedderSettings.name onto concrete classes.

from __future__ import annotations

from typing import Optional

from compare_studio.config.settings import EmbedderSettings
from .base import Embedder
from .clip_embedder import ClipEmbedder
from .thumbnail_embedder import ThumbnailEmbedder


def create_embedder(settings: Optional[EmbedderSettings] = None) -> Embedder:
    cfg = settings or EmbedderSettings()
    if cfg.name == "thumbnail":
        return ThumbnailEmbedder(dim=cfg.dim)
    if cfg.name == "clip":
        return ClipEmbedder(model_name=cfg.model_name, device=cfg.device)
    raise ValueError(f"Unknown embedder: {cfg.name}")
