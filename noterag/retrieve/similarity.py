"""Cosine similarity between embeddings."""

from collections.abc import Sequence

import numpy as np

from noterag.errors import DimensionMismatchError


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Compute cosine similarity between two vectors.

    Each vector is divided by its largest magnitude first, so very large or
    very small components do not overflow the norms. Zero-norm vectors score
    0.0, as does any non-finite intermediate result, so the value is always a
    finite float in [-1, 1].

    Args:
        a: First vector
        b: Second vector

    Returns:
        Similarity score

    Raises:
        DimensionMismatchError: If the vectors differ in length
    """
    vec_a = np.asarray(a, dtype=np.float64)
    vec_b = np.asarray(b, dtype=np.float64)

    if vec_a.shape != vec_b.shape:
        raise DimensionMismatchError(vec_a.size, vec_b.size)

    vec_a = _rescale(vec_a)
    vec_b = _rescale(vec_b)
    if vec_a is None or vec_b is None:
        return 0.0

    norm_a = np.linalg.norm(vec_a)
    norm_b = np.linalg.norm(vec_b)

    score = float(np.dot(vec_a, vec_b) / (norm_a * norm_b))
    if not np.isfinite(score):
        return 0.0

    # Rounding can push parallel vectors slightly past +/-1
    return max(-1.0, min(1.0, score))


def _rescale(vec: np.ndarray) -> np.ndarray | None:
    """Divide by the largest magnitude so norms neither overflow nor underflow.

    Returns None for zero or non-finite vectors.
    """
    peak = np.max(np.abs(vec)) if vec.size else 0.0
    if peak == 0 or not np.isfinite(peak):
        return None
    return vec / peak
