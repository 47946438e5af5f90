"""
SHEAF_GLUE - Local-to-global consistency over finite spaces
===========================================================

Given a space split into overlapping domains and a section on each,
decide whether the sections agree on every overlap and, if so, fold them
into one global section.

Structure:
    topology/   - OpenSet, TopologicalSpace / MetricSpace contracts
    spaces/     - GraphSpace, CellComplex (+ builder)
    operators/  - adjacency / incidence matrices, components, hop distances
    sheaf/      - Datum, Section, GluingEngine, fingerprints
    analysis/   - overlap nerve diagnostics for covers

Requirements:
    Python >= 3.9
    numpy >= 1.20
    scipy >= 1.11
"""

import sys

# Python version check
if sys.version_info < (3, 9):
    raise ImportError(f"sheaf_glue requires Python >= 3.9, got {sys.version}")

# scipy version check (sparse.csgraph hop distances)
import scipy
_scipy_version = tuple(int(p) for p in scipy.__version__.split('.')[:2] if p.isdigit())
if _scipy_version < (1, 11):
    raise ImportError(f"sheaf_glue requires scipy >= 1.11, got {scipy.__version__}")

# numpy version check
import numpy as np
_numpy_version = tuple(int(p) for p in np.__version__.split('.')[:2] if p.isdigit())
if _numpy_version < (1, 20):
    raise ImportError(f"sheaf_glue requires numpy >= 1.20, got {np.__version__}")

__version__ = "0.1.0"

from .constants import UNREACHABLE
from .errors import (
    SheafGlueError,
    ConstructionError,
    CoverError,
    IncompatibleCover,
    NonOpenDomain,
)
from .topology import OpenSet, TopologicalSpace, MetricSpace
from .spaces import GraphSpace, Cell, Skeleton, CellComplexBuilder, CellComplex
from .sheaf import (
    Datum,
    Section,
    GluingEngine,
    glue,
    section_fingerprint,
    cover_fingerprint,
)
from . import analysis
from . import operators
