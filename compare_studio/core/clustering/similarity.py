# Path: compare_studio/core/clustering/similarity.py
# Purpose: Compare embedding vectors.
# Layer: core/clustering.
# Details: Pure helpers with no I/O; degenerate inputs score 0 instead of raising.

from __future__ import annotations

import math
from typing import Sequence, Union

import numpy as np

VectorLike = Union[Sequence[float], np.ndarray]


def cosine_similarity(a: VectorLike, b: VectorLike) -> float:
    """Return the cosine of the angle between ``a`` and ``b``.

    Vectors of different length, empty vectors, and zero vectors have no
    meaningful direction, so they score ``0.0``.
    """

    left = np.asarray(a, dtype=np.float64).ravel()
    right = np.asarray(b, dtype=np.float64).ravel()
    if left.size == 0 or left.size != right.size:
        return 0.0

    # fsum is exactly rounded, so v.v equals |v|^2 bit for bit and sim(v, v) is exactly 1.0
    dot = math.fsum((left * right).tolist())
    left_sq = math.fsum((left * left).tolist())
    right_sq = math.fsum((right * right).tolist())
    norm = math.sqrt(left_sq * right_sq)
    if norm == 0.0:
        return 0.0
    return dot / norm
