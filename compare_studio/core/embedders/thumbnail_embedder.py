# Path: compare_studio/core/embedders/thumbnail_embedder.py
# Purpose: Provide a dependency-light embedder based on a tiny colour thumbnail.
# Layer: core/embedders.
# Details: Mean-centred colour layout vectors; shots of the same scene from different devices stay close.

from __future__ import annotations

import math

import numpy as np
from PIL import Image

from .base import Embedder


class ThumbnailEmbedder(Embedder):
    """Deterministic embedder that encodes the coarse colour layout of an image."""

    def __init__(self, dim: int = 192, name: str = "thumbnail") -> None:
        self.dim = dim
        self.name = name
        self.grid = max(1, round(math.sqrt(dim / 3)))

    def embed_image(self, image: Image.Image) -> np.ndarray:
        """Downsample to a ``grid`` x ``grid`` RGB thumbnail and centre it on its own mean."""

        resized = image.convert("RGB").resize((self.grid, self.grid), Image.Resampling.BOX)
        vector = np.asarray(resized, dtype=np.float32).flatten()
        vector = vector - vector.mean()
        if vector.size != self.dim:
            vector = np.pad(vector, (0, max(0, self.dim - vector.size)), mode="wrap")[: self.dim]
        return self._normalize(vector)
