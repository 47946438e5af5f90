"""
Sections
========

A Section is a partial assignment Point -> Datum over an explicit domain.

OPERATIONS (all pure, each returns a new Section):
    restrict(D)             domain ∩ D, values limited to it
    is_compatible(D, other) values of restrict(D) == values of other.restrict(D)
    glue(D, other)          receiver outside D, other's values on D ∩ dom(other)

INVARIANTS:
    restrict(restrict(S, D2), D1) == restrict(S, D1)   for D1 ⊆ D2
    restrict(S, domain(S)) == S
    is_compatible is symmetric

glue() does NOT check compatibility. Callers (GluingEngine) verify first.

Equality is structural: same domain and same point -> Datum mapping. A
point may be in the domain without a value (partial assignment); such a
point is distinguishable from one carrying a value.
"""

from types import MappingProxyType
from typing import Any, Callable, Dict, Hashable, Iterable, Iterator, Mapping, Optional

from .datum import Datum
from ..topology import OpenSet


class Section:
    """Immutable partial assignment over an OpenSet."""

    __slots__ = ('_domain', '_values', '_hash')

    def __init__(self, domain: Iterable[Hashable], values: Optional[Mapping[Hashable, Any]] = None):
        domain = OpenSet.coerce(domain)
        values = dict(values or {})

        stray = [p for p in values if p not in domain]
        if stray:
            raise ValueError(f"Section values defined outside its domain: {stray!r}")

        self._domain = domain
        self._values = MappingProxyType({p: Datum.of(v) for p, v in values.items()})
        self._hash = None

    @classmethod
    def empty(cls) -> "Section":
        """The section over the empty domain: the no-data result."""
        return cls(OpenSet.empty())

    @classmethod
    def from_function(cls, domain: Iterable[Hashable], fn: Callable[[Hashable], Any]) -> "Section":
        """Total section on `domain` with value fn(p) at each point p."""
        domain = OpenSet.coerce(domain)
        return cls(domain, {p: fn(p) for p in domain})

    @classmethod
    def _trusted(cls, domain: OpenSet, values: Dict[Hashable, Datum]) -> "Section":
        # Internal constructor: inputs already validated and coerced.
        section = cls.__new__(cls)
        section._domain = domain
        section._values = MappingProxyType(values)
        section._hash = None
        return section

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def domain(self) -> OpenSet:
        return self._domain

    @property
    def values(self) -> Mapping[Hashable, Datum]:
        return self._values

    @property
    def support(self) -> OpenSet:
        """Points of the domain that carry a value."""
        return OpenSet(self._values)

    @property
    def is_empty(self) -> bool:
        return not self._domain

    def get(self, point: Hashable, default: Any = None) -> Any:
        return self._values.get(point, default)

    def to_dict(self) -> Dict[Hashable, Any]:
        """Plain payloads keyed by point."""
        return {p: d.value for p, d in self._values.items()}

    # -------------------------------------------------------------------------
    # Restriction / compatibility / gluing
    # -------------------------------------------------------------------------

    def restrict(self, domain: Iterable[Hashable]) -> "Section":
        """
        Sub-assignment on domain ∩ self.domain.

        Points of `domain` outside the receiver's domain are omitted,
        not an error.
        """
        new_domain = self._domain.intersect(domain)
        if new_domain == self._domain:
            return self
        return Section._trusted(
            new_domain,
            {p: d for p, d in self._values.items() if p in new_domain},
        )

    def is_compatible(self, domain: Iterable[Hashable], other: "Section") -> bool:
        """
        True iff both sections carry the same values on `domain`.

        Only values are compared. A point of `domain` inside one domain but
        outside the other, with no value on either side, is not a conflict.
        A point with a value still differs from one without.
        """
        domain = OpenSet.coerce(domain)
        return dict(self.restrict(domain)._values) == dict(other.restrict(domain)._values)

    def glue(self, domain: Iterable[Hashable], other: "Section") -> "Section":
        """
        Merge `other` into the receiver on `domain`.

        Result:
            domain = self.domain ∪ (domain ∩ other.domain)
            value  = other's value on domain ∩ other.domain where other
                     defines one, the receiver's value everywhere else

        Always succeeds; no compatibility check is made here.
        """
        taken = OpenSet.coerce(domain).intersect(other._domain)
        values = dict(self._values)
        for p in taken:
            if p in other._values:
                values[p] = other._values[p]
        return Section._trusted(self._domain.union(taken), values)

    # -------------------------------------------------------------------------
    # Value semantics
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Section):
            return NotImplemented
        return self._domain == other._domain and dict(self._values) == dict(other._values)

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash((self._domain, frozenset(self._values.items())))
        return self._hash

    def __contains__(self, point: object) -> bool:
        return point in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._values)

    def __repr__(self) -> str:
        return f"Section(domain={self._domain!r}, values={dict(self._values)!r})"
