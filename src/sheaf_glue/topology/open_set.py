"""
Open Sets
=========

A finite, immutable set of points. Sections are defined over OpenSets.

Set algebra is pure: intersect/union/difference always return new
OpenSets and never touch the operands. Commutativity, associativity and
idempotence follow directly from frozenset.
"""

from typing import Any, Hashable, Iterable, Iterator


class OpenSet:
    """
    Finite set of points.

    Points are opaque: the only requirement is equality and hashing.
    Whether a set is actually open is decided by a space, not here.
    """

    __slots__ = ('_points',)

    def __init__(self, points: Iterable[Hashable] = ()):
        self._points = frozenset(points)

    @classmethod
    def empty(cls) -> "OpenSet":
        return cls()

    @classmethod
    def coerce(cls, value: Any) -> "OpenSet":
        """Return ``value`` unchanged if already an OpenSet, else wrap it."""
        if isinstance(value, OpenSet):
            return value
        return cls(value)

    @property
    def points(self) -> frozenset:
        return self._points

    # -------------------------------------------------------------------------
    # Set algebra
    # -------------------------------------------------------------------------

    def intersect(self, other: Iterable[Hashable]) -> "OpenSet":
        return OpenSet(self._points & OpenSet.coerce(other)._points)

    def union(self, other: Iterable[Hashable]) -> "OpenSet":
        return OpenSet(self._points | OpenSet.coerce(other)._points)

    def difference(self, other: Iterable[Hashable]) -> "OpenSet":
        return OpenSet(self._points - OpenSet.coerce(other)._points)

    def is_subset(self, other: Iterable[Hashable]) -> bool:
        return self._points <= OpenSet.coerce(other)._points

    def isdisjoint(self, other: Iterable[Hashable]) -> bool:
        return self._points.isdisjoint(OpenSet.coerce(other)._points)

    __and__ = intersect
    __or__ = union
    __sub__ = difference

    # -------------------------------------------------------------------------
    # Container protocol
    # -------------------------------------------------------------------------

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def __contains__(self, point: object) -> bool:
        return point in self._points

    def __bool__(self) -> bool:
        return bool(self._points)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, OpenSet):
            return self._points == other._points
        if isinstance(other, (set, frozenset)):
            return self._points == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._points)

    def __repr__(self) -> str:
        try:
            shown = sorted(self._points)
        except TypeError:
            shown = sorted(self._points, key=repr)
        return f"OpenSet({shown!r})"
