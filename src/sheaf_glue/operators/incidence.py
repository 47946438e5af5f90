"""
Adjacency and Incidence Matrices
================================

Pure combinatorics - no section data.

DEFINITIONS:
    A:    V × V  symmetric 0/1 adjacency of an undirected graph
    B:    E × V  oriented edge-vertex incidence ("gradient", d₀)
    M_ab: n_a × n_b  0/1 attachment matrix between two skeletons

CONVENTIONS:
    Rows/columns follow an explicit `order` list of points. Callers that
    need reproducible matrices pass sorted orders.
    For edge (i, j) with i <= j, i is the source (-1), j the target (+1).

IDENTITIES:
    A == |B|ᵀ|B| - diag(deg)      (off-diagonal, loop-free graphs)
    sum(A) == 2E                  (loop-free graphs)
    rank(B) == V - c              (c = connected components)
"""

from collections import deque
from typing import Dict, Hashable, Iterable, List, Sequence, Tuple

import numpy as np
from scipy.sparse import csr_matrix
from scipy.sparse.csgraph import shortest_path


def index_points(order: Sequence[Hashable]) -> Dict[Hashable, int]:
    """Map each point to its row/column index. Duplicates are rejected."""
    index = {}
    for i, p in enumerate(order):
        if p in index:
            raise ValueError(f"Point {p!r} appears twice in matrix order")
        index[p] = i
    return index


def build_adjacency(order: Sequence[Hashable],
                    edges: Iterable[Tuple[Hashable, Hashable]]) -> np.ndarray:
    """
    Build the symmetric adjacency matrix A of an undirected graph.

    Args:
        order: vertex order for rows/columns
        edges: iterable of (a, b) pairs

    Returns:
        A: (V, V) int matrix, A[i, j] = 1 iff {i, j} is an edge

    FAIL-FAST:
        Raises ValueError if an edge endpoint is not in `order`.
    """
    index = index_points(order)
    V = len(order)
    A = np.zeros((V, V), dtype=int)

    for a, b in edges:
        if a not in index or b not in index:
            raise ValueError(f"Edge ({a!r}, {b!r}) references a vertex outside the matrix order")
        i, j = index[a], index[b]
        A[i, j] = 1
        A[j, i] = 1

    return A


def build_oriented_incidence(order: Sequence[Hashable],
                             edges: Sequence[Tuple[Hashable, Hashable]]) -> np.ndarray:
    """
    Build oriented edge-vertex incidence B (the graph's d₀).

    DEFINITION:
        B[e, v] = -1 if v is the source of edge e
        B[e, v] = +1 if v is the target of edge e
        B[e, v] = 0 otherwise
    Self-loops produce an all-zero row.

    Returns:
        B: (E, V) int matrix

    PROPERTY:
        Every row sums to zero.
    """
    index = index_points(order)
    B = np.zeros((len(edges), len(order)), dtype=int)

    for e_idx, (a, b) in enumerate(edges):
        if a not in index or b not in index:
            raise ValueError(f"Edge {e_idx} ({a!r}, {b!r}) references a vertex outside the matrix order")
        if a == b:
            continue
        B[e_idx, index[a]] = -1
        B[e_idx, index[b]] = +1

    return B


def build_attachment_matrix(rows: Sequence[Hashable],
                            cols: Sequence[Hashable],
                            attachments: Dict[Hashable, Iterable[Hashable]]) -> np.ndarray:
    """
    0/1 matrix M with M[r, c] = 1 iff column id c is attached to row id r.

    Args:
        rows: ids of the row skeleton
        cols: ids of the column skeleton
        attachments: row id -> attached ids (ids not in `cols` are ignored)
    """
    col_index = index_points(cols)
    M = np.zeros((len(rows), len(cols)), dtype=int)

    for r_idx, r in enumerate(rows):
        for c in attachments.get(r, ()):
            c_idx = col_index.get(c)
            if c_idx is not None:
                M[r_idx, c_idx] = 1

    return M


def adjacency_lists(order: Sequence[Hashable],
                    edges: Iterable[Tuple[Hashable, Hashable]]) -> Dict[Hashable, List[Hashable]]:
    """Adjacency lists keyed by point; every point in `order` gets a list."""
    adj = {p: [] for p in order}
    for a, b in edges:
        adj[a].append(b)
        if a != b:
            adj[b].append(a)
    return adj


def connected_components(adj: Dict[Hashable, Iterable[Hashable]]) -> List[List[Hashable]]:
    """
    Connected components via BFS on adjacency lists.

    Components are returned in discovery order over `adj`'s key order.
    For a reproducible result pass an ordered dict built from a sorted order.
    """
    visited = set()
    components = []

    for start in adj:
        if start in visited:
            continue
        # BFS from start
        queue = deque([start])
        visited.add(start)
        component = [start]
        while queue:
            v = queue.popleft()
            for neighbor in adj[v]:
                if neighbor not in visited:
                    visited.add(neighbor)
                    component.append(neighbor)
                    queue.append(neighbor)
        components.append(component)

    return components


def hop_distance_matrix(A: np.ndarray) -> np.ndarray:
    """
    All-pairs hop counts from an adjacency matrix.

    Returns:
        D: (V, V) float matrix, D[i, j] = minimum hop count,
           numpy.inf where j is unreachable from i, 0 on the diagonal.
    """
    if A.shape[0] == 0:
        return np.zeros((0, 0))
    return shortest_path(csr_matrix(A), method='D', directed=False, unweighted=True)


def verify_adjacency(A: np.ndarray, n_edges: int, n_loops: int = 0) -> Dict[str, object]:
    """
    Structural checks on an adjacency matrix.

    Returns:
        dict with:
            'symmetric': bool
            'edge_count_ok': bool - sum(A) == 2E - loops
            'degrees': (V,) int array of row sums
    """
    symmetric = bool(np.array_equal(A, A.T))
    expected = 2 * (n_edges - n_loops) + n_loops
    total = int(np.sum(A))

    return {
        'symmetric': symmetric,
        'edge_count_ok': total == expected,
        'degrees': np.sum(A, axis=1),
    }
