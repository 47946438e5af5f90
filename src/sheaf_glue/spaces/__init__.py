"""Concrete space models: undirected graphs and cell complexes."""

from .graph import GraphSpace, canon_edge
from .cell_complex import Cell, Skeleton, CellComplexBuilder, CellComplex
