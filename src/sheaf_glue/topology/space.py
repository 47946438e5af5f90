"""
Space Contracts
===============

Every concrete space MUST implement:
    points()          -> frozenset of all points
    neighborhood(p)   -> OpenSet of points "near" p (model-defined,
                         need not be topologically minimal)
    is_open(S)        -> bool, decided on demand

The full lattice of open sets is never materialized. Each concrete model
documents the openness policy it adopts (see constants.OPENNESS_*).
"""

from abc import ABC, abstractmethod
from typing import Hashable, Iterable

from .open_set import OpenSet


class TopologicalSpace(ABC):
    """Finite space with a neighborhood function and an openness test."""

    #: one of constants.OPENNESS_*
    openness_policy: str = ""

    @abstractmethod
    def points(self) -> frozenset:
        """All points of the space."""

    @abstractmethod
    def neighborhood(self, point: Hashable) -> OpenSet:
        """Points near ``point`` under this model."""

    @abstractmethod
    def is_open(self, subset: Iterable[Hashable]) -> bool:
        """Whether ``subset`` is open under this model's policy."""

    def __contains__(self, point: object) -> bool:
        return point in self.points()

    def __len__(self) -> int:
        return len(self.points())


class MetricSpace(TopologicalSpace):
    """TopologicalSpace with a distance function."""

    @abstractmethod
    def distance(self, a: Hashable, b: Hashable):
        """Distance from ``a`` to ``b``; model-defined sentinel when undefined."""
