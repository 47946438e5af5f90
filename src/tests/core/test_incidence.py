"""
Tests for adjacency / incidence operators
=========================================

Identities:
- A symmetric, sum(A) = 2E (loop-free)
- rows of B sum to zero
- rank(B) = V - c

Run: python -m pytest tests/core/test_incidence.py -v
"""

import numpy as np
import pytest

from sheaf_glue.operators import (
    adjacency_lists,
    build_adjacency,
    build_attachment_matrix,
    build_oriented_incidence,
    connected_components,
    hop_distance_matrix,
    index_points,
    verify_adjacency,
)

ORDER = [1, 2, 3, 4, 5]
EDGES = [(1, 2), (2, 3), (3, 4)]


def test_index_points_rejects_duplicates():
    """Duplicate points in a matrix order are rejected."""
    assert index_points(["a", "b"]) == {"a": 0, "b": 1}
    with pytest.raises(ValueError, match="twice"):
        index_points(["a", "a"])


def test_adjacency_identities():
    A = build_adjacency(ORDER, EDGES)
    result = verify_adjacency(A, n_edges=len(EDGES))
    assert result['symmetric']
    assert result['edge_count_ok']
    assert list(result['degrees']) == [1, 2, 2, 1, 0]


def test_adjacency_with_loop():
    A = build_adjacency([1, 2], [(1, 1), (1, 2)])
    assert A[0, 0] == 1
    assert verify_adjacency(A, n_edges=2, n_loops=1)['edge_count_ok']


def test_adjacency_unknown_vertex():
    """Edge outside the matrix order raises."""
    with pytest.raises(ValueError, match="outside the matrix order"):
        build_adjacency([1, 2], [(1, 3)])


def test_oriented_incidence():
    B = build_oriented_incidence(ORDER, EDGES)
    assert B.shape == (3, 5)
    assert np.all(B.sum(axis=1) == 0)
    assert B[0, 0] == -1 and B[0, 1] == +1
    # rank(B) = V - c
    assert np.linalg.matrix_rank(B) == len(ORDER) - 2


def test_incidence_gram_is_laplacian():
    A = build_adjacency(ORDER, EDGES)
    B = build_oriented_incidence(ORDER, EDGES)
    L = B.T @ B
    assert np.array_equal(L, np.diag(A.sum(axis=1)) - A)


def test_attachment_matrix_ignores_foreign_ids():
    M = build_attachment_matrix(["e"], ["v1", "v2"], {"e": ["v1", "zzz"]})
    assert np.array_equal(M, np.array([[1, 0]]))


def test_components_bfs():
    adj = adjacency_lists(ORDER, EDGES)
    assert connected_components(adj) == [[1, 2, 3, 4], [5]]


def test_hop_distances():
    D = hop_distance_matrix(build_adjacency(ORDER, EDGES))
    assert D[0, 3] == 3
    assert np.isinf(D[0, 4])
    assert np.all(np.diag(D) == 0)
