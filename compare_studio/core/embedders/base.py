# Path: compare_studio/core/embedders/base.py
# Purpose: Define the Embedder interface for image embeddings.
# Layer: core/embedders.
# Details: Provides abstract methods to ensure pluggable embedder implementations.

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Optional

import numpy as np
from PIL import Image

ProgressCallback = Callable[[str], None]


class Embedder(ABC):
    """Abstract base class for all embedders used to group images into scenes."""

    name: str
    dim: int

    def load(self, progress: Optional[ProgressCallback] = None) -> None:
        """Prepare model weights; implementations report loading steps through ``progress``."""

    @abstractmethod
    def embed_image(self, image: Image.Image) -> np.ndarray:
        """Return an embedding for a given image."""

    @staticmethod
    def _normalize(vector: np.ndarray) -> np.ndarray:
        """Normalize embedding vectors to unit length to simplify similarity comparisons."""

        norm = np.linalg.norm(vector)
        if norm == 0:
            return vector.astype(np.float32)
        return (vector / norm).astype(np.float32)
