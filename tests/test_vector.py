"""
Vector utility tests: normalization, cosine similarity and centroids.

Run:
----
    pytest tests/test_vector.py -v
"""

import numpy as np
import pytest

from feed_engine.utils.vector import centroid_of, cosine_similarity, normalize


class TestNormalize:
    def test_unit_length(self):
        v = normalize([3.0, 4.0])
        assert np.allclose(v, [0.6, 0.8])
        assert np.linalg.norm(v) == pytest.approx(1.0)

    def test_zero_vector_unchanged(self):
        v = normalize([0.0, 0.0, 0.0])
        assert np.array_equal(v, [0.0, 0.0, 0.0])


class TestCosineSimilarity:
    @pytest.mark.parametrize("raw", [[1.0, 2.0, 3.0], [-0.5, 0.1], [7.0]])
    def test_self_similarity_is_one(self, raw):
        v = normalize(raw)
        assert cosine_similarity(v, v) == pytest.approx(1.0)

    def test_orthogonal_is_zero(self):
        assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == pytest.approx(0.0)

    def test_length_mismatch_uses_shared_prefix(self):
        assert cosine_similarity([1.0, 0.0, 5.0], [1.0, 0.0]) == pytest.approx(1.0)

    def test_empty_is_zero(self):
        assert cosine_similarity([], [1.0]) == 0.0


class TestCentroid:
    def test_empty_is_none(self):
        assert centroid_of([]) is None

    def test_duplicate_vector_centroid_is_normalized_vector(self):
        v = np.array([2.0, -1.0, 0.5])
        assert np.allclose(centroid_of([v, v]), normalize(v))

    def test_mean_of_orthogonal_vectors(self):
        c = centroid_of([[1.0, 0.0], [0.0, 1.0]])
        assert np.allclose(c, [np.sqrt(0.5), np.sqrt(0.5)])
