"""
Vector utilities — L2 normalization, cosine similarity and centroids for visual embeddings.
"""

from typing import Optional, Sequence, Union

import numpy as np

VectorLike = Union[Sequence[float], np.ndarray]


def normalize(vector: VectorLike) -> np.ndarray:
    """Scale a vector to unit L2 norm. A zero vector is returned unchanged."""
    arr = np.asarray(vector, dtype=float)
    norm = np.linalg.norm(arr)
    return arr / norm if norm > 0 else arr


def cosine_similarity(v1: VectorLike, v2: VectorLike) -> float:
    """
    Cosine similarity between two unit-normalized vectors.

    Both operands are already L2-normalized, so this is a plain dot product
    over the shared length.
    """
    a = np.asarray(v1, dtype=float)
    b = np.asarray(v2, dtype=float)
    n = min(a.shape[0], b.shape[0])
    if n == 0:
        return 0.0
    return float(np.dot(a[:n], b[:n]))


def centroid_of(vectors: Sequence[VectorLike]) -> Optional[np.ndarray]:
    """Element-wise mean of the vectors, L2-normalized. None for an empty list."""
    if len(vectors) == 0:
        return None
    return normalize(np.mean(np.stack([np.asarray(v, dtype=float) for v in vectors]), axis=0))
