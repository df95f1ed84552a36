# Path: compare_studio/core/embedders/clip_embedder.py
# Purpose: Provide a CLIP image embedder backed by Hugging Face transformers.
# Layer: core/embedders.
# Details: Heavy dependencies are imported lazily so the rest of the package works without them.

from __future__ import annotations

import logging
from typing import Any, Optional

import numpy as np
from PIL import Image

from .base import Embedder, ProgressCallback

logger = logging.getLogger(__name__)


class ClipEmbedder(Embedder):
    """CLIP ViT image encoder producing unit-length feature vectors."""

    def __init__(self, model_name: str = "openai/clip-vit-base-patch32", device: str = "cpu", dim: int = 512) -> None:
        self.model_name = model_name
        self.device = device
        self.dim = dim
        self.name = "clip"
        self._model: Any = None
        self._processor: Any = None

    def load(self, progress: Optional[ProgressCallback] = None) -> None:
        if self._model is not None:
            return
        try:
            import torch  # noqa: F401
            from transformers import CLIPModel, CLIPProcessor  # type: ignore[import]
        except ImportError as exc:  # pragma: no cover - runtime dependency
            raise RuntimeError("transformers and torch are required for the clip embedder.") from exc

        if progress:
            progress(f"Loading {self.model_name}...")
        self._processor = CLIPProcessor.from_pretrained(self.model_name)
        self._model = CLIPModel.from_pretrained(self.model_name).to(self.device).eval()
        self.dim = int(self._model.config.projection_dim)
        logger.info("Loaded CLIP model %s on %s (dim=%d)", self.model_name, self.device, self.dim)

    def embed_image(self, image: Image.Image) -> np.ndarray:
        import torch

        self.load()
        inputs = self._processor(images=image.convert("RGB"), return_tensors="pt").to(self.device)
        with torch.no_grad():
            features = self._model.get_image_features(**inputs)
        return self._normalize(features[0].cpu().numpy().astype(np.float32))
