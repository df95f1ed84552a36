# Path: compare_studio/core/clustering/scenes.py
# Purpose: Group images into scenes by embedding similarity.
# Layer: core/clustering.
# Details: Union-find over image ids; every pair scoring strictly above the threshold is merged.

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Hashable, Iterable, List, TypeVar

from .similarity import VectorLike, cosine_similarity

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.92

K = TypeVar("K", bound=Hashable)


@dataclass(frozen=True)
class EmbeddedImage:
    """Input row for clustering: an image id and its embedding."""

    id: str
    embedding: VectorLike


class UnionFind:
    """Disjoint sets keyed by arbitrary hashable ids.

    ``find`` compresses paths; ``union`` hangs the first root under the
    second without rank bookkeeping, which is fine for session-sized inputs.
    """

    def __init__(self) -> None:
        self._parent: Dict[Hashable, Hashable] = {}

    def find(self, item: K) -> K:
        parent = self._parent.setdefault(item, item)
        if parent == item:
            return item
        root = item
        while self._parent[root] != root:
            root = self._parent[root]
        while item != root:
            next_item = self._parent[item]
            self._parent[item] = root
            item = next_item
        return root  # type: ignore[return-value]

    def union(self, a: Hashable, b: Hashable) -> None:
        root_a = self.find(a)
        root_b = self.find(b)
        if root_a != root_b:
            self._parent[root_a] = root_b


def cluster_by_similarity(
    images: Iterable[EmbeddedImage],
    threshold: float = DEFAULT_THRESHOLD,
) -> Dict[str, str]:
    """Map every image id to the id of its scene root.

    All unordered pairs are compared, so cost is quadratic in the number of
    images. Similarity equal to ``threshold`` does not merge. Root ids depend
    on input order and are not stable across runs.
    """

    rows: List[EmbeddedImage] = list(images)
    uf = UnionFind()
    merged = 0
    for i in range(len(rows)):
        uf.find(rows[i].id)
        for j in range(i + 1, len(rows)):
            score = cosine_similarity(rows[i].embedding, rows[j].embedding)
            if score > threshold:
                uf.union(rows[i].id, rows[j].id)
                merged += 1

    assignment = {row.id: uf.find(row.id) for row in rows}
    logger.debug(
        "Clustered %d images into %d scenes (%d merging pairs, threshold=%.3f)",
        len(rows),
        len(set(assignment.values())),
        merged,
        threshold,
    )
    return assignment


def count_scenes(assignment: Dict[str, str], min_size: int = 1) -> int:
    """Return how many scenes in ``assignment`` hold at least ``min_size`` images."""

    sizes: Dict[str, int] = {}
    for root in assignment.values():
        sizes[root] = sizes.get(root, 0) + 1
    return sum(1 for size in sizes.values() if size >= min_size)

