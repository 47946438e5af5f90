"""
Cell Complex Space
==================

Dimension-stratified cells with a symmetric attachment relation.

LIFECYCLE:
    CellComplexBuilder(max_dim)  - mutable, owned by one constructing context
        .add_cell(...)           - register cells dimension by dimension
        .attach(a, b)            - record a symmetric attachment
        .freeze()                - -> CellComplex (immutable, queryable)

STRUCTURE:
    A complex of maximum dimension N owns one Skeleton per dimension 0..N.
    Cell ids are unique within a dimension. Points of the space are cell ids.

ATTACHMENT:
    attach(a, b) appends b to a's attachment list and a to b's. Dimensions
    are NOT required to differ by exactly one (unlike classical CW
    attaching maps); the relation is a plain symmetric adjacency.

OPENNESS (per-skeleton policy, see constants.OPENNESS_PER_SKELETON):
    S is open iff for every skeleton K: S ∩ K == ∅ or S ∩ K == S.
    Consequently a non-empty open set lies inside one skeleton, and a set
    of ids foreign to every skeleton is open. This deliberately differs
    from the weak topology of a CW complex.
"""

import logging
import warnings
from collections import Counter
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Hashable, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

import numpy as np

from ..constants import OPENNESS_PER_SKELETON
from ..errors import ConstructionError
from ..operators.incidence import build_attachment_matrix
from ..topology import OpenSet, TopologicalSpace

logger = logging.getLogger(__name__)

CellRef = Union[Hashable, Tuple[int, Hashable]]


@dataclass(frozen=True)
class Cell:
    """One cell: an id unique within its dimension, and its attachments."""
    id: Hashable
    dim: int
    attachments: Tuple[Hashable, ...] = field(default=())

    def is_attached_to(self, other_id: Hashable) -> bool:
        return other_id in self.attachments


@dataclass(frozen=True)
class Skeleton:
    """All cells of one fixed dimension, keyed by id."""
    dim: int
    cells: Mapping[Hashable, Cell] = field(default_factory=dict)

    def ids(self) -> frozenset:
        return frozenset(self.cells)

    def __contains__(self, cell_id: object) -> bool:
        return cell_id in self.cells

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells.values())

    def __hash__(self) -> int:
        return hash((self.dim, self.ids()))


# =============================================================================
# BUILDER
# =============================================================================

class CellComplexBuilder:
    """
    Assemble a cell complex of maximum dimension `max_dim`.

    Every rejected call leaves the builder unchanged.
    """

    def __init__(self, max_dim: int):
        if max_dim < 0:
            raise ConstructionError(f"Complex dimension must be >= 0, got {max_dim}")
        self._max_dim = max_dim
        # dim -> id -> attachment list (insertion ordered)
        self._cells: List[Dict[Hashable, List[Hashable]]] = [dict() for _ in range(max_dim + 1)]
        self._frozen = False

    @property
    def max_dim(self) -> int:
        return self._max_dim

    def _check_open(self) -> None:
        if self._frozen:
            raise ConstructionError("Builder already frozen; start a new CellComplexBuilder")

    def add_cell(self, cell: Union[Cell, Hashable], dim: Optional[int] = None) -> "CellComplexBuilder":
        """
        Register a cell.

        Accepts either a Cell instance or an id plus `dim`. Attachments
        carried by a Cell instance must name cells already registered (id
        or (dim, id)); each is applied through attach(), so both sides
        record it.

        Raises:
            ConstructionError: dim > max_dim, dim < 0, the id is already
                registered at that dimension, or an attachment target is
                unknown or ambiguous
        """
        self._check_open()
        if isinstance(cell, Cell):
            if dim is not None and dim != cell.dim:
                raise ConstructionError(f"Cell {cell.id!r} has dim={cell.dim}, but dim={dim} was given")
            cell_id, dim, attachments = cell.id, cell.dim, cell.attachments
        else:
            if dim is None:
                raise ConstructionError(f"Cell {cell!r} needs a dimension")
            cell_id, attachments = cell, ()

        if dim < 0:
            raise ConstructionError(f"Cell {cell_id!r}: dimension must be >= 0, got {dim}")
        if dim > self._max_dim:
            raise ConstructionError(
                f"Cell {cell_id!r}: dimension {dim} exceeds complex dimension {self._max_dim}"
            )
        if cell_id in self._cells[dim]:
            raise ConstructionError(f"Duplicate cell id {cell_id!r} at dimension {dim}")
        targets = [self._resolve(ref) for ref in attachments]

        self._cells[dim][cell_id] = []
        for target in targets:
            self.attach((dim, cell_id), target)
        return self

    def _resolve(self, ref: CellRef) -> Tuple[int, Hashable]:
        """Turn an id or (dim, id) pair into a registered (dim, id)."""
        if isinstance(ref, tuple) and len(ref) == 2 and isinstance(ref[0], int):
            dim, cell_id = ref
            if 0 <= dim <= self._max_dim and cell_id in self._cells[dim]:
                return dim, cell_id
            # (dim, id) may itself be a plain tuple id
            if not any(ref in layer for layer in self._cells):
                raise ConstructionError(f"No cell {cell_id!r} at dimension {dim}")

        dims = [d for d, layer in enumerate(self._cells) if ref in layer]
        if not dims:
            raise ConstructionError(f"Unknown cell {ref!r}")
        if len(dims) > 1:
            raise ConstructionError(
                f"Cell id {ref!r} exists in dimensions {dims}; pass (dim, id) to disambiguate"
            )
        return dims[0], ref

    def attach(self, a: CellRef, b: CellRef) -> "CellComplexBuilder":
        """
        Record that a and b are attached (symmetric, idempotent).

        Args:
            a, b: cell id, or (dim, id) pair when the id is reused across
                dimensions
        """
        self._check_open()
        dim_a, id_a = self._resolve(a)
        dim_b, id_b = self._resolve(b)

        att_a = self._cells[dim_a][id_a]
        att_b = self._cells[dim_b][id_b]
        if id_b not in att_a:
            att_a.append(id_b)
        if id_a not in att_b:
            att_b.append(id_a)
        return self

    def freeze(self) -> "CellComplex":
        """
        Produce the immutable complex. The builder cannot be used afterwards.

        Warns (UserWarning) when an id is reused across dimensions, since
        such cells collapse to one point of the space.
        """
        self._check_open()
        skeletons = tuple(
            Skeleton(dim=d, cells=MappingProxyType({
                cid: Cell(id=cid, dim=d, attachments=tuple(att))
                for cid, att in layer.items()
            }))
            for d, layer in enumerate(self._cells)
        )
        self._frozen = True

        counts = Counter(cid for layer in self._cells for cid in layer)
        shared = sorted((cid for cid, n in counts.items() if n > 1), key=repr)
        if shared:
            warnings.warn(
                f"Cell ids reused across dimensions collapse to one point: {shared}",
                UserWarning,
            )

        complex_ = CellComplex(self._max_dim, skeletons)
        logger.info("CellComplex frozen: dim=%d, cells per dim=%s",
                    self._max_dim, complex_.cell_counts())
        return complex_


# =============================================================================
# FROZEN COMPLEX
# =============================================================================

class CellComplex(TopologicalSpace):
    """
    Immutable cell complex viewed as a space whose points are cell ids.

    Build with CellComplexBuilder; direct construction expects already
    validated skeletons (one per dimension 0..max_dim).
    """

    openness_policy = OPENNESS_PER_SKELETON

    def __init__(self, max_dim: int, skeletons: Tuple[Skeleton, ...]):
        if len(skeletons) != max_dim + 1:
            raise ConstructionError(
                f"Expected {max_dim + 1} skeletons for dimension {max_dim}, got {len(skeletons)}"
            )
        for d, sk in enumerate(skeletons):
            if sk.dim != d:
                raise ConstructionError(f"Skeleton at position {d} has dim={sk.dim}")
        self._max_dim = max_dim
        self._skeletons = tuple(skeletons)
        self._points = frozenset(cid for sk in self._skeletons for cid in sk.cells)

    @property
    def dim(self) -> int:
        return self._max_dim

    @property
    def skeletons(self) -> Tuple[Skeleton, ...]:
        return self._skeletons

    def skeleton(self, dim: int) -> Skeleton:
        if not 0 <= dim <= self._max_dim:
            raise ValueError(f"No skeleton at dimension {dim} (complex dimension {self._max_dim})")
        return self._skeletons[dim]

    def get_cell(self, dim: int, cell_id: Hashable) -> Optional[Cell]:
        if not 0 <= dim <= self._max_dim:
            return None
        return self._skeletons[dim].cells.get(cell_id)

    def cells(self) -> List[Cell]:
        """All cells, dimension by dimension."""
        return [cell for sk in self._skeletons for cell in sk]

    def cell_counts(self) -> Tuple[int, ...]:
        return tuple(len(sk) for sk in self._skeletons)

    def euler_characteristic(self) -> int:
        """χ = Σ (-1)^d · #cells(d)"""
        return sum((-1) ** d * n for d, n in enumerate(self.cell_counts()))

    def attachment_matrix(self, dim_a: int, dim_b: int) -> np.ndarray:
        """
        (n_a, n_b) 0/1 matrix, rows = skeleton dim_a, cols = skeleton dim_b,
        both in sorted id order. Entry 1 iff the two cells are attached.

        PROPERTY:
            attachment_matrix(a, b) == attachment_matrix(b, a).T
        """
        sk_a = self.skeleton(dim_a)
        sk_b = self.skeleton(dim_b)
        rows = sorted(sk_a.cells, key=repr)
        cols = sorted(sk_b.cells, key=repr)
        attachments = {cid: sk_a.cells[cid].attachments for cid in rows}
        return build_attachment_matrix(rows, cols, attachments)

    # -------------------------------------------------------------------------
    # TopologicalSpace contract
    # -------------------------------------------------------------------------

    def points(self) -> frozenset:
        return self._points

    def neighborhood(self, point: Hashable) -> OpenSet:
        """Ids of all cells (any dimension) whose attachment list contains `point`."""
        return OpenSet(
            cell.id
            for sk in self._skeletons
            for cell in sk
            if cell.is_attached_to(point)
        )

    def is_open(self, subset: Iterable[Hashable]) -> bool:
        """Per-skeleton test; see module docstring."""
        s = OpenSet.coerce(subset)
        for sk in self._skeletons:
            inside = s.intersect(sk.ids())
            if inside and inside != s:
                return False
        return True

    def __repr__(self) -> str:
        return f"CellComplex(dim={self._max_dim}, cells={self.cell_counts()})"
