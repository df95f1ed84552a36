# Path: compare_studio/core/clustering/__init__.py
# Purpose: Package initializer for the scene clustering engine.
# Layer: core/clustering.
# Details: Exposes cosine similarity and union-find scene grouping.

from .scenes import DEFAULT_THRESHOLD, EmbeddedImage, UnionFind, cluster_by_similarity, count_scenes
from .similarity import cosine_similarity

__all__ = [
    "DEFAULT_THRESHOLD",
    "EmbeddedImage",
    "UnionFind",
    "cluster_by_similarity",
    "cosine_similarity",
    "count_scenes",
]
