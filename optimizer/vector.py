from __future__ import annotations
from typing import Iterable, List, Union
import numpy as np

Scalar = Union[int, float]


class FixedVector:
    """
    Fixed-dimension real vector used for positions and velocities.

    The dimension is set at construction and every operand of an
    arithmetic operation must share it.
    """
    __slots__ = ("coordinates",)

    def __init__(self, coordinates: Iterable[float]):
        arr = np.array(coordinates, dtype=float).ravel()
        if arr.size == 0:
            raise ValueError("FixedVector needs at least one coordinate")
        self.coordinates: np.ndarray = arr

    @classmethod
    def zeros(cls, dim: int) -> "FixedVector":
        return cls(np.zeros(int(dim)))

    @property
    def dim(self) -> int:
        return self.coordinates.size

    def _coords_of(self, other: "FixedVector") -> np.ndarray:
        if other.dim != self.dim:
            raise ValueError(f"Dimension mismatch: {self.dim} vs {other.dim}")
        return other.coordinates

    def _binary(self, other, op) -> "FixedVector":
        if isinstance(other, FixedVector):
            return FixedVector(op(self.coordinates, self._coords_of(other)))
        if np.isscalar(other):
            return FixedVector(op(self.coordinates, float(other)))
        return NotImplemented

    # vector and scalar arithmetic
    def __add__(self, other):
        return self._binary(other, np.add)

    def __radd__(self, other):
        return self._binary(other, np.add)

    def __sub__(self, other):
        return self._binary(other, np.subtract)

    def __mul__(self, other):
        # vector * vector is the elementwise (Hadamard) product
        return self._binary(other, np.multiply)

    def __rmul__(self, other):
        return self._binary(other, np.multiply)

    def __truediv__(self, other):
        if isinstance(other, FixedVector):
            return NotImplemented
        return self._binary(other, np.divide)

    def __neg__(self) -> "FixedVector":
        return FixedVector(-self.coordinates)

    def __iadd__(self, other):
        if isinstance(other, FixedVector):
            self.coordinates += self._coords_of(other)
        else:
            self.coordinates += float(other)
        return self

    def __isub__(self, other):
        if isinstance(other, FixedVector):
            self.coordinates -= self._coords_of(other)
        else:
            self.coordinates -= float(other)
        return self

    def __imul__(self, other):
        if isinstance(other, FixedVector):
            self.coordinates *= self._coords_of(other)
        else:
            self.coordinates *= float(other)
        return self

    def clamp(self, lower: float, upper: float) -> "FixedVector":
        """Clamp every coordinate into [lower, upper] in place."""
        np.clip(self.coordinates, lower, upper, out=self.coordinates)
        return self

    def clamped(self, lower: float, upper: float) -> "FixedVector":
        return self.copy().clamp(lower, upper)

    def copy(self) -> "FixedVector":
        return FixedVector(self.coordinates.copy())

    def to_list(self) -> List[float]:
        return [float(c) for c in self.coordinates]

    def __array__(self, dtype=None, copy=None):
        if dtype is None and not copy:
            return self.coordinates
        return self.coordinates.astype(dtype or float, copy=True)

    def __len__(self) -> int:
        return self.dim

    def __iter__(self):
        return iter(self.coordinates)

    def __getitem__(self, idx):
        return self.coordinates[idx]

    def __eq__(self, other) -> bool:
        if not isinstance(other, FixedVector):
            return NotImplemented
        return self.dim == other.dim and bool(np.array_equal(self.coordinates, other.coordinates))

    __hash__ = None

    def __repr__(self) -> str:
        return f"FixedVector({self.to_list()})"
