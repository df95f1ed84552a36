# Path: compare_studio/core/indexing/index_builder.py
# Purpose: Embed a batch of session images synchronously.
# Layer: core/indexing.
# Details: Inline alternative to the background worker, with progress reporting.

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Optional

from PIL import Image
from tqdm import tqdm

from compare_studio.core.embedders.base import Embedder
from compare_studio.core.models.domain import ImageLocator, ImageRecord

logger = logging.getLogger(__name__)


class SceneIndexBuilder:
    """Batch process images into embedding vectors keyed by image id."""

    def __init__(self, embedder: Embedder, decoder: Callable[[ImageLocator], Image.Image], show_progress: bool = True) -> None:
        self.embedder = embedder
        self.decoder = decoder
        self.show_progress = show_progress

    def build(self, records: Iterable[ImageRecord]) -> Dict[str, List[float]]:
        """
        Encode images and return their embeddings.

        External calls:
        - compare_studio/core/embedders/base.py::Embedder.embed_image - create embeddings for each image.
        """

        self.embedder.load()
        vectors: Dict[str, List[float]] = {}
        for record in tqdm(list(records), desc="Embedding images", unit="img", disable=not self.show_progress):
            image = self._load_image(record)
            if image is None:
                continue
            vectors[record.id] = [float(v) for v in self.embedder.embed_image(image)]
        return vectors

    def _load_image(self, record: ImageRecord) -> Optional[Image.Image]:
        """Decode an image, returning None if decoding fails."""

        try:
            return self.decoder(record.locator)
        except (OSError, ValueError) as exc:
            logger.warning("Skipping %s: %s", record.name, exc)
            return None
