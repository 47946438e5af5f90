"""
Graph Space
===========

A finite undirected graph viewed as a space.

    points          = vertices
    neighborhood(v) = vertices sharing an edge with v
    distance(a, b)  = BFS hop count, UNREACHABLE if disconnected
    is_open(S)      = True for every S (discrete topology)

Adjacency and distance carry the graph's structure; openness does not, so
every subset is open.

EDGE CONVENTION:
    Edges are stored as (min, max). (1, 2) and (2, 1) are the same edge
    and are kept once. Vertices must therefore be mutually orderable.
"""

import logging
from collections import deque
from typing import Dict, Hashable, Iterable, List, Optional, Tuple

import numpy as np

from ..constants import OPENNESS_DISCRETE, UNREACHABLE
from ..errors import ConstructionError
from ..operators.incidence import (
    adjacency_lists,
    build_adjacency,
    build_oriented_incidence,
    connected_components,
    hop_distance_matrix,
    verify_adjacency,
)
from ..topology import MetricSpace, OpenSet

logger = logging.getLogger(__name__)

Edge = Tuple[Hashable, Hashable]


def canon_edge(a: Hashable, b: Hashable) -> Edge:
    return (a, b) if a <= b else (b, a)


def _sorted_points(points: Iterable[Hashable]) -> List[Hashable]:
    try:
        return sorted(points)
    except TypeError:
        return sorted(points, key=repr)


class GraphSpace(MetricSpace):
    """
    Undirected graph as a metric space.

    Args:
        vertices: iterable of hashable, orderable vertex ids
        edges: iterable of (a, b) pairs; orientation is ignored

    Raises:
        ConstructionError: if an edge endpoint is not a vertex, or if two
            endpoints cannot be ordered against each other
    """

    openness_policy = OPENNESS_DISCRETE

    def __init__(self, vertices: Iterable[Hashable], edges: Iterable[Edge] = ()):
        vertex_set = frozenset(vertices)

        normalized = set()
        for a, b in edges:
            if a not in vertex_set or b not in vertex_set:
                raise ConstructionError(
                    f"Edge ({a!r}, {b!r}) references a vertex not in the vertex set"
                )
            try:
                normalized.add(canon_edge(a, b))
            except TypeError as e:
                raise ConstructionError(
                    f"Edge ({a!r}, {b!r}) has endpoints that cannot be ordered"
                ) from e

        self._vertices = vertex_set
        self._edges = frozenset(normalized)
        self._order = _sorted_points(vertex_set)
        self._edge_order = _sorted_points(self._edges)
        self._adj = adjacency_lists(self._order, self._edge_order)

        logger.debug("GraphSpace built: V=%d, E=%d", len(self._vertices), len(self._edges))

    # -------------------------------------------------------------------------
    # Structure
    # -------------------------------------------------------------------------

    @property
    def vertices(self) -> frozenset:
        return self._vertices

    @property
    def edges(self) -> frozenset:
        return self._edges

    @property
    def vertex_order(self) -> List[Hashable]:
        """Sorted vertex order used for matrix rows/columns."""
        return list(self._order)

    def _require_vertex(self, v: Hashable) -> None:
        if v not in self._vertices:
            raise ValueError(f"{v!r} is not a vertex of this graph")

    def degree(self, v: Hashable) -> int:
        self._require_vertex(v)
        return len(self._adj[v])

    # -------------------------------------------------------------------------
    # TopologicalSpace contract
    # -------------------------------------------------------------------------

    def points(self) -> frozenset:
        return self._vertices

    def neighborhood(self, point: Hashable) -> OpenSet:
        """All w such that (point, w) or (w, point) is a stored edge."""
        self._require_vertex(point)
        return OpenSet(self._adj[point])

    def is_open(self, subset: Iterable[Hashable]) -> bool:
        return True

    # -------------------------------------------------------------------------
    # MetricSpace contract
    # -------------------------------------------------------------------------

    def distance(self, a: Hashable, b: Hashable) -> Optional[int]:
        """
        Minimum hop count from a to b.

        Returns:
            0 if a == b, the BFS hop count otherwise, UNREACHABLE (None)
            when b is in another connected component.
        """
        self._require_vertex(a)
        self._require_vertex(b)
        if a == b:
            return 0

        visited = {a}
        queue = deque([(a, 0)])
        while queue:
            v, d = queue.popleft()
            for neighbor in self._adj[v]:
                if neighbor == b:
                    return d + 1
                if neighbor not in visited:
                    visited.add(neighbor)
                    queue.append((neighbor, d + 1))

        return UNREACHABLE

    # -------------------------------------------------------------------------
    # Matrix views
    # -------------------------------------------------------------------------

    def adjacency_matrix(self) -> np.ndarray:
        """(V, V) 0/1 adjacency in `vertex_order`."""
        return build_adjacency(self._order, self._edge_order)

    def incidence_matrix(self) -> np.ndarray:
        """
        (E, V) oriented incidence, rows in sorted edge order, columns in
        `vertex_order`. Each stored edge (a, b) has a = min as source.
        """
        return build_oriented_incidence(self._order, self._edge_order)

    def verify(self) -> Dict[str, object]:
        """
        Structural self-check of the adjacency matrix.

        Returns:
            dict with 'symmetric', 'edge_count_ok', 'degrees' (vertex_order)
            and 'degrees_match' (row sums agree with degree())
        """
        loops = sum(1 for a, b in self._edges if a == b)
        result = verify_adjacency(self.adjacency_matrix(), len(self._edges), loops)
        result['degrees_match'] = [int(d) for d in result['degrees']] == [
            len(set(self._adj[v])) for v in self._order
        ]
        return result

    def distance_matrix(self) -> np.ndarray:
        """
        All-pairs hop counts in `vertex_order`.

        numpy.inf marks unreachable pairs. Agrees with distance() everywhere
        distance() is not UNREACHABLE.
        """
        return hop_distance_matrix(self.adjacency_matrix())

    def connected_components(self) -> List[OpenSet]:
        """Components as OpenSets, ordered by their smallest vertex."""
        return [OpenSet(c) for c in connected_components(self._adj)]

    def __repr__(self) -> str:
        return f"GraphSpace(V={len(self._vertices)}, E={len(self._edges)})"
