# Path: compare_studio/session/state.py
# Purpose: Hold everything a single comparison session knows about its images.
# Layer: session.
# Details: Owns the image set, selections, scene ids, and activity log; core engines stay stateless.

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from compare_studio.config.settings import AppSettings
from compare_studio.core.clustering import EmbeddedImage, cluster_by_similarity, count_scenes
from compare_studio.core.compositing import CompositeOptions, CompositeResult, Compositor, FooterDetector
from compare_studio.core.compositing.export import export_composite
from compare_studio.core.compositing.lens import get_zoom_label
from compare_studio.core.indexing.index_builder import SceneIndexBuilder
from compare_studio.core.indexing.scanner import ImageScanner, file_dedupe_key, is_supported
from compare_studio.core.metadata import extract_metadata
from compare_studio.core.models.domain import ComparisonPair, ImageRecord, LogEntry, LogLevel, SceneGroup, new_image_id

logger = logging.getLogger(__name__)

_PY_LEVELS = {
    "info": logging.INFO,
    "success": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


class SessionState:
    """Explicit state object for one interactive session.

    Nothing here is persisted; discarding the object discards the session.
    """

    def __init__(self, settings: Optional[AppSettings] = None) -> None:
        self.settings = settings or AppSettings()
        self.images: List[ImageRecord] = []
        self.logs: List[LogEntry] = []
        self.selected_left: Optional[ImageRecord] = None
        self.selected_right: Optional[ImageRecord] = None
        self._keys: Dict[str, str] = {}

    # activity log

    def add_log(self, message: str, level: LogLevel = "info") -> LogEntry:
        entry = LogEntry(message=message, level=level)
        self.logs.append(entry)
        del self.logs[: max(0, len(self.logs) - self.settings.log_history)]
        logger.log(_PY_LEVELS[level], message)
        return entry

    def clear_logs(self) -> None:
        self.logs = []

    # images

    def get(self, image_id: str) -> Optional[ImageRecord]:
        for image in self.images:
            if image.id == image_id:
                return image
        return None

    def add_images(self, paths: Iterable[Path]) -> List[ImageRecord]:
        """Import supported, not-yet-seen files and read their metadata."""

        seen = set(self._keys.values())
        candidates: List[tuple] = []
        for path in map(Path, paths):
            if not is_supported(path, self.settings.accepted_extensions):
                continue
            try:
                key = file_dedupe_key(path)
            except OSError as exc:
                self.add_log(f"Failed to load {path.name}: {exc}", "error")
                continue
            if key in seen:
                continue
            seen.add(key)
            candidates.append((path, key))

        if not candidates:
            self.add_log("No new images to add (duplicates or unsupported format).", "warn")
            return []

        self.add_log("Extracting EXIF...", "info")
        added: List[ImageRecord] = []
        for path, key in candidates:
            try:
                data = path.read_bytes()
            except OSError as exc:
                self.add_log(f"Failed to load {path.name}: {exc}", "error")
                continue
            record = ImageRecord(
                id=new_image_id(),
                locator=path,
                meta=extract_metadata(data, path.suffix),
                dedupe_key=key,
            )
            self._keys[record.id] = key
            added.append(record)

        if added:
            self.images.extend(added)
            self.add_log(f"Ready. Added {len(added)} image(s).", "success")
        return added

    def add_folder(self, root: Path) -> List[ImageRecord]:
        return self.add_images(ImageScanner(Path(root), self.settings.accepted_extensions).scan())

    def set_embedding(self, image_id: str, embedding: Sequence[float]) -> None:
        image = self.get(image_id)
        if image is None:
            logger.debug("Embedding for unknown image %s ignored", image_id)
            return
        image.embedding = list(embedding)

    def set_scene_id(self, image_id: str, scene_id: Optional[str]) -> None:
        image = self.get(image_id)
        if image is not None:
            image.scene_id = scene_id

    def remove_image(self, image_id: str) -> None:
        self.images = [image for image in self.images if image.id != image_id]
        self._keys.pop(image_id, None)
        if self.selected_left is not None and self.selected_left.id == image_id:
            self.selected_left = None
        if self.selected_right is not None and self.selected_right.id == image_id:
            self.selected_right = None

    def clear_images(self) -> None:
        self.images = []
        self._keys.clear()
        self.selected_left = None
        self.selected_right = None

    # scenes

    def apply_clustering(self) -> Dict[str, str]:
        """Recluster every embedded image and write the new scene ids.

        Images without an embedding are left untouched.
        """

        rows = [EmbeddedImage(id=image.id, embedding=image.embedding) for image in self.images if image.embedding]
        assignment = cluster_by_similarity(rows, threshold=self.settings.clustering.threshold)
        for image_id, scene_id in assignment.items():
            self.set_scene_id(image_id, scene_id)
        if assignment:
            self.add_log(
                f"Grouped {len(assignment)} image(s) into {count_scenes(assignment)} scene(s).",
                "success",
            )
        return assignment

    def index_scenes(self, builder: SceneIndexBuilder) -> Dict[str, str]:
        """Embed images that lack a vector inline, then recluster."""

        missing = [image for image in self.images if not image.embedding]
        for image_id, vector in builder.build(missing).items():
            self.set_embedding(image_id, vector)
        skipped = sum(1 for image in missing if not image.embedding)
        if skipped:
            self.add_log(f"Could not embed {skipped} image(s).", "warn")
        return self.apply_clustering()

    def scene_groups(self) -> List[SceneGroup]:
        """Group images by scene in first-seen order, with unsorted images last."""

        by_scene: Dict[Optional[str], List[ImageRecord]] = {}
        for image in self.images:
            by_scene.setdefault(image.scene_id, []).append(image)

        order = [scene_id for scene_id in by_scene if scene_id is not None]
        groups = [
            SceneGroup(label=f"Scene {index}", scene_id=scene_id, images=by_scene[scene_id])
            for index, scene_id in enumerate(order, start=1)
        ]
        if None in by_scene:
            groups.append(SceneGroup(label="Unsorted", scene_id=None, images=by_scene[None]))
        return groups

    # selection

    def select_left(self, image: Optional[ImageRecord]) -> None:
        """Select ``image`` for the left slot; selecting the current one again clears it."""

        if image is not None and self.selected_left is not None and self.selected_left.id == image.id:
            image = None
        self.selected_left = image

    def select_right(self, image: Optional[ImageRecord]) -> None:
        """Select ``image`` for the right slot; selecting the current one again clears it."""

        if image is not None and self.selected_right is not None and self.selected_right.id == image.id:
            image = None
        self.selected_right = image

    def compare_scene(self, scene_id: str) -> Optional[ComparisonPair]:
        """Select the first two images of a scene and return the resulting pair."""

        members = [image for image in self.images if image.scene_id == scene_id]
        if len(members) < 2:
            self.add_log("A scene needs at least two images to compare.", "warn")
            return None
        self.selected_left, self.selected_right = members[0], members[1]
        return self.current_pair()

    def current_pair(self) -> Optional[ComparisonPair]:
        left, right = self.selected_left, self.selected_right
        if left is None or right is None:
            return None
        scene_id = left.scene_id if left.scene_id == right.scene_id else None
        return ComparisonPair(
            id=f"{left.id}:{right.id}",
            scene_id=scene_id,
            left_image=left,
            right_image=right,
            zoom_label=get_zoom_label(left.meta.focal_length),
        )

    # rendering

    def render_current_pair(self, options: Optional[CompositeOptions] = None) -> Optional[CompositeResult]:
        """Composite the selected pair, logging per-slot failures; None if the pair is incomplete."""

        pair = self.current_pair()
        if pair is None:
            self.add_log("Select two images to compare.", "warn")
            return None

        compositor = Compositor(settings=self.settings.compositor, detector=FooterDetector(self.settings.detector))
        result = compositor.render(pair.left_image, pair.right_image, options)
        for side, message in result.errors.items():
            image = pair.left_image if side == "left" else pair.right_image
            self.add_log(f"Could not decode {image.name}: {message}", "error")
        return result

    def export_current_pair(self, options: Optional[CompositeOptions] = None) -> Optional[Path]:
        pair = self.current_pair()
        result = self.render_current_pair(options)
        if pair is None or result is None:
            return None
        path = export_composite(result.canvas, pair.left_image.meta, pair.right_image.meta, self.settings.export)
        self.add_log(f"Exported {path.name}.", "success")
        return path

