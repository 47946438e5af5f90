"""
Global constants for sheaf_glue
===============================

All sentinels and defaults in ONE place.
"""

# Distance sentinel for GraphSpace.distance when no path exists.
# Distinct from 0, which is reserved for distance(a, a).
UNREACHABLE = None

# Overlap nerve diagnostics (analysis.cocycle)
# Order 2 is the pairwise check the gluing engine always performs.
MIN_OVERLAP_ORDER = 3
DEFAULT_MAX_OVERLAP_ORDER = 3

# Fingerprinting
DIGEST_NAME = "sha256"
FINGERPRINT_ENCODING = "utf-8"
FINGERPRINT_VERSION = 1

# Datum kinds (closed set of supported section values)
KIND_INT = "int"
KIND_FLOAT = "float"
KIND_BOOL = "bool"
KIND_TEXT = "text"
KIND_BYTES = "bytes"
KIND_VECTOR = "vector"

VALUE_KINDS = (
    KIND_INT,
    KIND_FLOAT,
    KIND_BOOL,
    KIND_TEXT,
    KIND_BYTES,
    KIND_VECTOR,
)

# =============================================================================
# OPENNESS POLICIES
# =============================================================================
#
# GraphSpace:   discrete topology, every subset is open.
# CellComplex:  per-skeleton test. A set S is open iff for every skeleton K,
#               S ∩ K is empty or S ∩ K == S. Non-empty open sets therefore
#               live inside a single skeleton. This is a coarse stand-in for
#               the weak (CW) topology and is NOT the classical definition.
#
OPENNESS_DISCRETE = "discrete"
OPENNESS_PER_SKELETON = "per_skeleton"
