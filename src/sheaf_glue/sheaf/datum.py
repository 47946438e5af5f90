"""
Section Values
==============

Datum is the closed set of value kinds a section may hold:

    int, float, bool, text, bytes, vector

Every value is tagged with its kind so that equality is structural and
never relies on runtime type inspection downstream. bool is its own kind
(True != Datum.of(1)). Vectors are stored as tuples of floats so that
numpy arrays hash and compare exactly.
"""

import numbers
from dataclasses import dataclass
from typing import Any, Tuple

import numpy as np

from ..constants import (
    KIND_BOOL,
    KIND_BYTES,
    KIND_FLOAT,
    KIND_INT,
    KIND_TEXT,
    KIND_VECTOR,
    VALUE_KINDS,
)


@dataclass(frozen=True)
class Datum:
    """A kind-tagged section value."""
    kind: str
    payload: Any

    def __post_init__(self):
        if self.kind not in VALUE_KINDS:
            raise ValueError(f"Unknown datum kind {self.kind!r}; expected one of {VALUE_KINDS}")

    @classmethod
    def of(cls, value: Any) -> "Datum":
        """
        Coerce a plain value.

        Raises:
            TypeError: for values outside the supported kinds
        """
        if isinstance(value, Datum):
            return value
        # bool before int: bool is an int subclass
        if isinstance(value, (bool, np.bool_)):
            return cls(KIND_BOOL, bool(value))
        if isinstance(value, numbers.Integral):
            return cls(KIND_INT, int(value))
        if isinstance(value, numbers.Real):
            return cls(KIND_FLOAT, float(value))
        if isinstance(value, str):
            return cls(KIND_TEXT, value)
        if isinstance(value, (bytes, bytearray)):
            return cls(KIND_BYTES, bytes(value))
        if isinstance(value, (np.ndarray, list, tuple)):
            return cls(KIND_VECTOR, _as_vector(value))
        raise TypeError(f"Unsupported section value type: {type(value).__name__}")

    @property
    def value(self) -> Any:
        """Plain Python view of the payload."""
        return self.payload

    def as_array(self) -> np.ndarray:
        if self.kind != KIND_VECTOR:
            raise TypeError(f"Datum of kind {self.kind!r} is not a vector")
        return np.asarray(self.payload, dtype=float)

    def canonical(self) -> list:
        """JSON-safe [kind, payload] pair."""
        if self.kind == KIND_BYTES:
            return [self.kind, self.payload.hex()]
        if self.kind == KIND_VECTOR:
            return [self.kind, [repr(x) for x in self.payload]]
        if self.kind == KIND_FLOAT:
            return [self.kind, repr(self.payload)]
        return [self.kind, self.payload]

    def __repr__(self) -> str:
        return f"Datum({self.kind}, {self.payload!r})"


def _as_vector(value: Any) -> Tuple[float, ...]:
    arr = np.asarray(value)
    if arr.ndim != 1:
        raise TypeError(f"Vector values must be 1D, got shape {arr.shape}")
    if arr.size and not np.issubdtype(arr.dtype, np.number):
        raise TypeError(f"Vector values must be numeric, got dtype {arr.dtype}")
    return tuple(float(x) for x in arr.astype(float))
