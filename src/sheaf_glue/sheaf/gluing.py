"""
Gluing Engine
=============

Local-to-global: fold a cover of (domain, section) pairs into one section.

ALGORITHM:
    0. (optional) every domain must be open in the space
    1. for every unordered pair (i, j), i < j:
           overlap = domain_i ∩ domain_j
           overlap ≠ ∅ and not section_i.is_compatible(overlap, section_j)
               -> IncompatibleCover(i, j)
    2. acc = section_0; acc = acc.glue(domain_k, section_k) for k = 1..n-1

EDGE CASES:
    empty cover   -> Section.empty(), not an error
    single entry  -> that section, unchanged

WHY PAIRWISE IS ENOUGH:
    Sections here are plain point -> value assignments, so restriction
    composes. Every k-fold intersection lies inside some pairwise overlap,
    and two sections that agree on a set agree on each of its subsets.
    Pairwise agreement therefore implies agreement on every k-fold overlap.
    analysis.cocycle reports the overlap structure as a diagnostic only.
"""

import logging
from itertools import combinations
from typing import Hashable, Iterable, List, Optional, Sequence, Tuple

from ..errors import CoverError, IncompatibleCover, NonOpenDomain
from ..topology import OpenSet, TopologicalSpace
from .section import Section

logger = logging.getLogger(__name__)

Cover = Sequence[Tuple[OpenSet, Section]]


def normalize_cover(cover: Iterable[Tuple[Iterable[Hashable], Section]]) -> List[Tuple[OpenSet, Section]]:
    """Materialize a cover as a list with OpenSet domains."""
    normalized = []
    for idx, entry in enumerate(cover):
        try:
            domain, section = entry
        except (TypeError, ValueError) as e:
            raise TypeError(f"Cover entry {idx} must be a (domain, section) pair") from e
        if not isinstance(section, Section):
            raise TypeError(f"Cover entry {idx}: expected Section, got {type(section).__name__}")
        normalized.append((OpenSet.coerce(domain), section))
    return normalized


class GluingEngine:
    """
    Sheaf gluing over a finite cover.

    Args:
        space: optional space; when given, every cover domain must be open

    The engine never mutates its inputs.
    """

    def __init__(self, space: Optional[TopologicalSpace] = None):
        self.space = space

    # -------------------------------------------------------------------------
    # Presheaf
    # -------------------------------------------------------------------------

    def restriction(self, domain: Iterable[Hashable], section: Section) -> Section:
        return section.restrict(domain)

    # -------------------------------------------------------------------------
    # Checks
    # -------------------------------------------------------------------------

    def check_open(self, cover: Cover) -> None:
        if self.space is None:
            return
        for idx, (domain, _) in enumerate(cover):
            if not self.space.is_open(domain):
                raise NonOpenDomain(idx)

    def check_pairwise(self, cover: Iterable[Tuple[Iterable[Hashable], Section]]) -> None:
        """
        Raise IncompatibleCover(i, j) for the first pair, in (i, j)
        lexicographic order, whose sections disagree on the overlap.
        """
        cover = normalize_cover(cover)
        for (i, (domain_i, section_i)), (j, (domain_j, section_j)) in combinations(enumerate(cover), 2):
            overlap = domain_i.intersect(domain_j)
            if not overlap:
                continue
            if not section_i.is_compatible(overlap, section_j):
                logger.debug("Entries %d and %d disagree on %d overlap points", i, j, len(overlap))
                raise IncompatibleCover(i, j, overlap)

    def is_compatible_cover(self, cover: Iterable[Tuple[Iterable[Hashable], Section]]) -> bool:
        """Non-raising form of the checks glue() performs."""
        try:
            self.validate(cover)
        except CoverError:
            return False
        return True

    def validate(self, cover: Iterable[Tuple[Iterable[Hashable], Section]]) -> List[Tuple[OpenSet, Section]]:
        """Run every configured check; return the normalized cover."""
        cover = normalize_cover(cover)
        self.check_open(cover)
        self.check_pairwise(cover)
        return cover

    # -------------------------------------------------------------------------
    # Gluing
    # -------------------------------------------------------------------------

    def glue(self, cover: Iterable[Tuple[Iterable[Hashable], Section]]) -> Section:
        """
        Fold a compatible cover into one global section.

        Returns:
            the global Section; Section.empty() for an empty cover

        Raises:
            IncompatibleCover: two entries disagree on an overlap
            NonOpenDomain: a domain is not open in `space`
        """
        cover = self.validate(cover)
        if not cover:
            logger.debug("Empty cover: returning the empty section")
            return Section.empty()

        accumulator = cover[0][1]
        for domain, section in cover[1:]:
            accumulator = accumulator.glue(domain, section)

        logger.info("Glued %d cover entries into a section over %d points",
                    len(cover), len(accumulator.domain))
        return accumulator

    # -------------------------------------------------------------------------
    # Uniqueness
    # -------------------------------------------------------------------------

    def is_locally_equal(self, domain: Iterable[Hashable], section_i: Section, section_j: Section) -> bool:
        """Whether the two sections agree once both are restricted to `domain`."""
        domain = OpenSet.coerce(domain)
        return section_i.is_compatible(domain, section_j)

    def uniqueness(self, triples: Iterable[Tuple[Iterable[Hashable], Section, Section]]) -> bool:
        """
        True iff no (domain, s_i, s_j) triple is locally equal on its domain.

        A locally-equal pair of distinct candidate sections means the
        examined domain does not determine the gluing.
        """
        for domain, section_i, section_j in triples:
            if self.is_locally_equal(domain, section_i, section_j):
                return False
        return True


def glue(cover: Iterable[Tuple[Iterable[Hashable], Section]], **kwargs) -> Section:
    """Convenience: GluingEngine(**kwargs).glue(cover)."""
    return GluingEngine(**kwargs).glue(cover)
