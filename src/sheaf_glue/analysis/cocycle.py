"""
Overlap Structure Diagnostics
=============================

The nerve of a cover: which domains intersect, two at a time and k at a
time. find_overlap_conflict reports the first k-fold intersection,
k = MIN_OVERLAP_ORDER .. max_order, on which two sections disagree.

NOTE:
    Each k-fold intersection lies inside a pairwise overlap, and sections
    that agree on a set agree on its subsets. A cover that passes
    GluingEngine.check_pairwise therefore never has a k-fold conflict; a
    conflict found here always shows up as a pairwise disagreement too.
    Use this module to inspect covers, not as an extra gluing check.

COST:
    O(C(n, k)) intersections per order k. Keep max_order small.
"""

import logging
from itertools import combinations
from typing import Dict, List, Optional, Sequence, Tuple

from ..constants import DEFAULT_MAX_OVERLAP_ORDER, MIN_OVERLAP_ORDER
from ..topology import OpenSet
from ..sheaf.section import Section

logger = logging.getLogger(__name__)


def overlap_nerve(domains: Sequence[OpenSet],
                  max_order: int = DEFAULT_MAX_OVERLAP_ORDER) -> Dict[Tuple[int, ...], OpenSet]:
    """
    Non-empty intersections of cover domains.

    Args:
        domains: cover domains in cover order
        max_order: largest number of domains intersected at once

    Returns:
        dict: index tuple (ascending) -> non-empty common intersection,
              for every order 2..max_order
    """
    nerve = {}
    for order in range(2, max_order + 1):
        found = False
        for idx in combinations(range(len(domains)), order):
            # A k-simplex needs all its faces; reuse the (k-1)-face.
            if order > 2:
                face = nerve.get(idx[:-1])
                if face is None:
                    continue
                common = face.intersect(domains[idx[-1]])
            else:
                common = domains[idx[0]].intersect(domains[idx[1]])
            if common:
                nerve[idx] = common
                found = True
        if not found:
            break
    return nerve


def find_overlap_conflict(cover: Sequence[Tuple[OpenSet, Section]],
                          max_order: int = DEFAULT_MAX_OVERLAP_ORDER) -> Optional[Tuple[Tuple[int, ...], int, int]]:
    """
    First k-fold overlap (k >= MIN_OVERLAP_ORDER) on which two sections disagree.

    Returns:
        (index tuple, i, j) for the first disagreeing pair, or None
    """
    domains = [d for d, _ in cover]
    nerve = overlap_nerve(domains, max_order)

    for idx, common in sorted(nerve.items(), key=lambda kv: (len(kv[0]), kv[0])):
        if len(idx) < MIN_OVERLAP_ORDER:
            continue
        first = idx[0]
        reference = cover[first][1]
        for other in idx[1:]:
            if not reference.is_compatible(common, cover[other][1]):
                logger.debug("Overlap %s: entries %d and %d disagree", idx, first, other)
                return idx, first, other

    return None


def overlap_orders(domains: Sequence[OpenSet]) -> Dict[object, int]:
    """For each point, the number of cover domains containing it."""
    counts: Dict[object, int] = {}
    for d in domains:
        for p in d:
            counts[p] = counts.get(p, 0) + 1
    return counts


def max_overlap_order(domains: Sequence[OpenSet]) -> int:
    """Largest number of domains sharing a single point (0 for an empty cover)."""
    return max(overlap_orders(domains).values(), default=0)


def summarize_overlaps(domains: Sequence[OpenSet]) -> List[str]:
    """Human-readable lines describing the overlap structure of a cover."""
    nerve = overlap_nerve(domains, max_order=max(2, max_overlap_order(domains)))
    by_order: Dict[int, int] = {}
    for idx in nerve:
        by_order[len(idx)] = by_order.get(len(idx), 0) + 1

    lines = [f"Cover: {len(domains)} domains"]
    for order in sorted(by_order):
        lines.append(f"  {order}-fold overlaps: {by_order[order]}")
    if not by_order:
        lines.append("  no overlaps")
    return lines
