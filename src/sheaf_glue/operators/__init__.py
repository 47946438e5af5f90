"""Adjacency / incidence matrices, BFS components, hop-distance matrices."""

from .incidence import (
    index_points,
    build_adjacency,
    build_oriented_incidence,
    build_attachment_matrix,
    adjacency_lists,
    connected_components,
    hop_distance_matrix,
    verify_adjacency,
)
