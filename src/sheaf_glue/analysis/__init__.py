"""Cover analysis: overlap nerve and k-fold agreement diagnostics."""

from .cocycle import (
    overlap_nerve,
    find_overlap_conflict,
    overlap_orders,
    max_overlap_order,
    summarize_overlaps,
)
