# Copyright 2025 Google LLC.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Hypervector representations.

A `HyperVector` is a fixed-length sequence of elements from one domain. The
kind of vector is a closed set of tags (`VectorKind`), each with its own
storage:

- `BINARY`: {False, True}, bit-packed.
- `BIPOLAR`: {-1, +1}, bit-packed (a set bit reads as +1).
- `SPARSE`: boolean or numeric, a 1 x N `scipy.sparse.csr_matrix`, with the
  density `p` it was drawn with.
- `REAL`: dense floats, with a multiplicity counter `n`.
- `INT`: dense integers, with a multiplicity counter `n`.
- `GRADED`: dense fuzzy truth values in [0, 1].
- `GRADED_BIPOLAR`: dense values in [-1, 1], stored on [0, 1].

Which algebra applies to a vector is decided by its `ElementKind`, looked up
from the tag rather than stored on the instance.
"""

from __future__ import annotations

import dataclasses
import enum
import math
import operator
from typing import Any, Callable

from absl import logging
import numpy as np
from scipy import sparse

from hyperdim.core import bitvector
from hyperdim.core import config
from hyperdim.core import errors
from hyperdim.core import fuzzy

__all__ = [
    "VectorKind",
    "ElementKind",
    "HyperVector",
    "element_kind",
    "check_compatible",
    "hdv",
    "binhdv",
    "bphdv",
    "sphdv",
    "realhdv",
    "gradhdv",
    "gradbphdv",
    "from_values",
]


class VectorKind(enum.Enum):
    BINARY = "binary"
    BIPOLAR = "bipolar"
    SPARSE = "sparse"
    REAL = "real"
    INT = "int"
    GRADED = "graded"
    GRADED_BIPOLAR = "graded_bipolar"


class ElementKind(enum.Enum):
    """Element domains that select the formulas of bind, unbind and bundle."""

    BINARY = "binary"
    NUMERIC = "numeric"
    GRADED = "graded"


_ELEMENT_KINDS = {
    VectorKind.BINARY: ElementKind.BINARY,
    VectorKind.BIPOLAR: ElementKind.NUMERIC,
    VectorKind.SPARSE: ElementKind.NUMERIC,
    VectorKind.REAL: ElementKind.NUMERIC,
    VectorKind.INT: ElementKind.NUMERIC,
    VectorKind.GRADED: ElementKind.GRADED,
    VectorKind.GRADED_BIPOLAR: ElementKind.GRADED,
}

BIT_KINDS = frozenset({VectorKind.BINARY, VectorKind.BIPOLAR})

GRADED_BOUNDS = (0.0, 1.0)
GRADED_BIPOLAR_BOUNDS = (-1.0, 1.0)


def element_kind(kind: VectorKind) -> ElementKind:
    """Return the element domain of a vector kind."""
    return _ELEMENT_KINDS[kind]


@dataclasses.dataclass(eq=False)
class HyperVector:
    """A hyperdimensional vector of one `VectorKind`.

    Vectors are values: operations return new vectors, and only `shift_`
    mutates storage after construction. Use the named constructors
    (`binhdv`, `gradhdv`, `from_values`, ...) rather than building
    instances directly.

    Attributes:
        kind: The representation tag.
        data: Backing storage; `PackedBits` for bit kinds, a 1 x N
            `csr_matrix` for `SPARSE`, a numpy array otherwise.
        label: Optional semantic label.
        p: Density the sparse vector was drawn with; None for other kinds.
        n: Number of vectors bundled into a `REAL` or `INT` vector.
        bounds: (lower, upper) range of a graded vector, in its read-out
            domain.
    """

    kind: VectorKind
    data: Any
    label: str | None = None
    p: float | None = None
    n: int = 1
    bounds: tuple[float, float] | None = None

    @property
    def dimension(self) -> int:
        """Return the dimensionality of the vector."""
        if self.kind is VectorKind.SPARSE:
            return self.data.shape[1]
        return len(self.data)

    @property
    def element_kind(self) -> ElementKind:
        return element_kind(self.kind)

    @property
    def dtype(self) -> np.dtype:
        """Element type of the read-out values."""
        if self.kind is VectorKind.BINARY:
            return np.dtype(bool)
        if self.kind is VectorKind.BIPOLAR:
            return np.dtype(np.int8)
        return self.data.dtype

    def __len__(self) -> int:
        return self.dimension

    def __getitem__(self, i):
        i = operator.index(i)
        if self.kind is VectorKind.BINARY:
            return self.data[i]
        if self.kind is VectorKind.BIPOLAR:
            return 1 if self.data[i] else -1
        if self.kind is VectorKind.SPARSE:
            if i < 0:
                i += self.dimension
            if not 0 <= i < self.dimension:
                raise IndexError(
                    f"index {i} out of range for dimension {self.dimension}"
                )
            return self.data[0, i]
        if self.kind is VectorKind.GRADED_BIPOLAR:
            return fuzzy.graded_to_bipolar(self.data[i])
        return self.data[i]

    def __iter__(self):
        return iter(self.to_array())

    def to_array(self) -> np.ndarray:
        """Return the elements as a dense numpy array in their domain."""
        if self.kind is VectorKind.BINARY:
            return self.data.to_bools()
        if self.kind is VectorKind.BIPOLAR:
            return np.where(self.data.to_bools(), 1, -1).astype(np.int8)
        if self.kind is VectorKind.SPARSE:
            return self.data.toarray().ravel()
        if self.kind is VectorKind.GRADED_BIPOLAR:
            return fuzzy.graded_to_bipolar(self.data)
        return self.data.copy()

    def sum(self):
        """Sum of the elements.

        Bit kinds use a popcount: `popcount` for binary vectors and
        `2 * popcount - N` for bipolar ones.
        """
        if self.kind is VectorKind.BINARY:
            return self.data.popcount()
        if self.kind is VectorKind.BIPOLAR:
            return 2 * self.data.popcount() - self.dimension
        if self.kind is VectorKind.GRADED_BIPOLAR:
            return fuzzy.graded_to_bipolar(self.data).sum()
        return self.data.sum()

    def norm(self) -> float:
        """Euclidean norm of the elements (booleans embed as 0 and 1)."""
        if self.kind is VectorKind.BINARY:
            return math.sqrt(self.data.popcount())
        if self.kind is VectorKind.BIPOLAR:
            return math.sqrt(self.dimension)
        if self.kind is VectorKind.SPARSE:
            values = self.data.data.astype(np.float64)
            return float(np.sqrt(np.dot(values, values)))
        return float(np.linalg.norm(self.to_array().astype(np.float64)))

    def copy(self) -> "HyperVector":
        """Return an independent copy with its own storage."""
        return dataclasses.replace(self, data=self.data.copy())

    def bind(self, other: "HyperVector") -> "HyperVector":
        """Bind this vector with another."""
        from hyperdim.core import operations

        return operations.bind(self, other)

    def unbind(self, other: "HyperVector") -> "HyperVector":
        """Unbind another vector from this one."""
        from hyperdim.core import operations

        return operations.unbind(self, other)

    def shift(self, k: int = 1) -> "HyperVector":
        """Return this vector circularly rotated right by `k` positions."""
        from hyperdim.core import operations

        return operations.shift(self, k)

    def similarity(self, other: "HyperVector") -> float:
        """Compute the kind-specific similarity with another vector."""
        from hyperdim.core import similarity

        return similarity.sim(self, other)

    def __mul__(self, other):
        if not isinstance(other, HyperVector):
            return NotImplemented
        return self.bind(other)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HyperVector):
            return NotImplemented
        if self.kind is not other.kind or self.dimension != other.dimension:
            return False
        if self.kind in BIT_KINDS:
            return self.data == other.data
        if self.kind is VectorKind.SPARSE:
            return (self.data != other.data).nnz == 0
        return bool(np.array_equal(self.data, other.data))

    __hash__ = None

    def __repr__(self) -> str:
        label_str = f", label={self.label!r}" if self.label else ""
        return f"HyperVector(kind={self.kind.value}, dim={self.dimension}{label_str})"


def check_compatible(vectors) -> None:
    """Require all vectors to share one kind and one dimension.

    Raises:
        DimensionMismatchError: If kinds or dimensions differ.
    """
    first = vectors[0]
    for v in vectors[1:]:
        if v.kind is not first.kind:
            raise errors.DimensionMismatchError(
                f"Cannot combine {first.kind.value} and {v.kind.value} vectors"
            )
        if v.dimension != first.dimension:
            raise errors.DimensionMismatchError(
                f"All vectors must have same dimension: expected "
                f"{first.dimension}, got {v.dimension}"
            )


def _resolve_dimension(n: int | None) -> int:
    if n is None:
        return config.get_config().dimension
    if n < 1:
        raise errors.InvalidArgumentError(f"Dimension must be positive, got {n}")
    return n


def _check_graded_bounds(l: float, u: float) -> None:
    if not 0 <= l < u <= 1:
        raise errors.InvalidRangeError(
            f"Bounds for graded vectors have to be 0 <= l < u <= 1, got ({l}, {u})"
        )


def _check_graded_bipolar_bounds(l: float, u: float) -> None:
    if not -1 <= l < 0 < u <= 1:
        raise errors.InvalidRangeError(
            "Bounds for graded bipolar vectors have to be -1 <= l < 0 < u <= 1, "
            f"got ({l}, {u})"
        )


def _random(
    kind: VectorKind,
    n: int | None,
    rng: np.random.Generator | None,
    draw: Callable[[int, np.random.Generator], Any],
    **fields,
) -> HyperVector:
    n = _resolve_dimension(n)
    if rng is None:
        rng = config.get_rng()
    logging.debug("Generating random %s hypervector, dim=%d", kind.value, n)
    return HyperVector(kind=kind, data=draw(n, rng), **fields)


def binhdv(
    n: int | None = None,
    label: str | None = None,
    rng: np.random.Generator | None = None,
) -> HyperVector:
    """Generate a random binary hypervector.

    Every bit is an independent fair coin; storage is bit-packed.

    Args:
        n: The dimensionality (default from the configuration, 10000).
        label: Optional semantic label.
        rng: Optional numpy random generator for reproducibility.

    Returns:
        A new `BINARY` hypervector.
    """
    return _random(
        VectorKind.BINARY, n, rng, bitvector.PackedBits.random, label=label
    )


def hdv(
    n: int | None = None,
    label: str | None = None,
    rng: np.random.Generator | None = None,
) -> HyperVector:
    """Generate a random hypervector of the default (binary) kind."""
    return binhdv(n, label=label, rng=rng)


def bphdv(
    n: int | None = None,
    label: str | None = None,
    rng: np.random.Generator | None = None,
) -> HyperVector:
    """Generate a random bipolar {-1, +1} hypervector, stored bit-packed."""
    return _random(
        VectorKind.BIPOLAR, n, rng, bitvector.PackedBits.random, label=label
    )


def sphdv(
    n: int | None = None,
    dtype=bool,
    *,
    p: float = 0.1,
    label: str | None = None,
    rng: np.random.Generator | None = None,
) -> HyperVector:
    """Generate a random sparse hypervector.

    Each position is non-zero independently with probability `p`. Non-zero
    elements are True for boolean vectors, uniform on [0, 1) for floating
    types and uniform positive integers for integer types.

    Args:
        n: The dimensionality (default from the configuration, 10000).
        dtype: Element type of the vector.
        p: Probability of a non-zero element.
        label: Optional semantic label.
        rng: Optional numpy random generator for reproducibility.

    Returns:
        A new `SPARSE` hypervector remembering `p`.

    Raises:
        InvalidRangeError: If `p` is outside [0, 1].
        InvalidArgumentError: If `dtype` is not boolean or numeric.
    """
    if not 0 <= p <= 1:
        raise errors.InvalidRangeError(f"Density p must be in [0, 1], got {p}")
    dtype = np.dtype(dtype)
    if dtype == np.dtype(bool):
        fill = lambda k, rng: np.ones(k, dtype=bool)
    elif np.issubdtype(dtype, np.floating):
        fill = lambda k, rng: rng.random(k).astype(dtype)
    elif np.issubdtype(dtype, np.integer):
        high = np.iinfo(dtype).max
        fill = lambda k, rng: rng.integers(1, high, size=k, dtype=dtype, endpoint=True)
    else:
        raise errors.InvalidArgumentError(
            f"Sparse vectors hold boolean or numeric elements, got {dtype}"
        )

    def draw(n, rng):
        indices = np.flatnonzero(rng.random(n) < p)
        values = fill(len(indices), rng)
        return sparse.csr_matrix(
            (values, indices, np.array([0, len(indices)])), shape=(1, n)
        )

    return _random(VectorKind.SPARSE, n, rng, draw, label=label, p=p)


def realhdv(
    n: int | None = None,
    dtype=np.float64,
    label: str | None = None,
    rng: np.random.Generator | None = None,
) -> HyperVector:
    """Generate a real hypervector of standard normal elements.

    Raises:
        InvalidArgumentError: If `dtype` is not float32 or float64.
    """
    dtype = np.dtype(dtype)
    if dtype not in (np.dtype(np.float32), np.dtype(np.float64)):
        raise errors.InvalidArgumentError(
            f"Real vectors need a float32 or float64 dtype, got {dtype}"
        )
    return _random(
        VectorKind.REAL,
        n,
        rng,
        lambda n, rng: rng.standard_normal(n, dtype=dtype),
        label=label,
    )


def gradhdv(
    n: int | None = None,
    *,
    l: float = 0.0,
    u: float = 1.0,
    label: str | None = None,
    rng: np.random.Generator | None = None,
) -> HyperVector:
    """Generate a graded hypervector, uniform on [l, u].

    Raises:
        InvalidRangeError: Unless 0 <= l < u <= 1.
    """
    _check_graded_bounds(l, u)
    return _random(
        VectorKind.GRADED,
        n,
        rng,
        lambda n, rng: l + (u - l) * rng.random(n),
        label=label,
        bounds=(l, u),
    )


def gradbphdv(
    n: int | None = None,
    *,
    l: float = -1.0,
    u: float = 1.0,
    label: str | None = None,
    rng: np.random.Generator | None = None,
) -> HyperVector:
    """Generate a graded bipolar hypervector, uniform on [l, u].

    Values are stored on [0, 1] and mapped back to [-1, 1] on read.

    Raises:
        InvalidRangeError: Unless -1 <= l < 0 < u <= 1.
    """
    _check_graded_bipolar_bounds(l, u)
    return _random(
        VectorKind.GRADED_BIPOLAR,
        n,
        rng,
        lambda n, rng: (l + 1) / 2 + (u - l) / 2 * rng.random(n),
        label=label,
        bounds=(l, u),
    )


def from_values(
    kind: VectorKind,
    values,
    *,
    label: str | None = None,
    p: float | None = None,
    n: int = 1,
    bounds: tuple[float, float] | None = None,
) -> HyperVector:
    """Wrap explicit element values in a hypervector of the given kind.

    Args:
        kind: The representation to build.
        values: One-dimensional values in the element domain of `kind`. Bipolar
            and graded bipolar values are given on [-1, 1]. Sparse vectors also
            accept a scipy sparse matrix.
        label: Optional semantic label.
        p: Density of a sparse vector (default: its fraction of non-zeros).
        n: Multiplicity of a real or integer vector.
        bounds: Range of a graded vector (default: the whole domain).

    Returns:
        A new hypervector owning a copy of `values`.

    Raises:
        InvalidArgumentError: If `values` is empty or not one-dimensional.
        InvalidRangeError: If a value lies outside the domain of `kind`.
    """
    if kind is VectorKind.SPARSE and sparse.issparse(values):
        data = sparse.csr_matrix(values.reshape(1, -1), copy=True)
        if data.shape[1] < 1:
            raise errors.InvalidArgumentError("Cannot build an empty hypervector")
        if p is None:
            p = data.nnz / data.shape[1]
        return HyperVector(kind=kind, data=data, label=label, p=p)

    arr = np.array(values)
    if arr.ndim != 1:
        raise errors.InvalidArgumentError(
            f"Hypervector values must be one-dimensional, got shape {arr.shape}"
        )
    if len(arr) == 0:
        raise errors.InvalidArgumentError("Cannot build an empty hypervector")

    if kind is VectorKind.BINARY:
        if not np.all(np.isin(arr, (0, 1))):
            raise errors.InvalidRangeError("Binary values must be 0/1 or boolean")
        return HyperVector(
            kind=kind, data=bitvector.PackedBits.from_bools(arr), label=label
        )
    if kind is VectorKind.BIPOLAR:
        if not np.all(np.isin(arr, (-1, 1))):
            raise errors.InvalidRangeError("Bipolar values must be -1 or +1")
        return HyperVector(
            kind=kind, data=bitvector.PackedBits.from_bools(arr > 0), label=label
        )
    if kind is VectorKind.SPARSE:
        data = sparse.csr_matrix(arr.reshape(1, -1))
        if p is None:
            p = data.nnz / len(arr)
        return HyperVector(kind=kind, data=data, label=label, p=p)
    if kind is VectorKind.REAL:
        if not np.issubdtype(arr.dtype, np.floating):
            arr = arr.astype(np.float64)
        return HyperVector(kind=kind, data=arr, label=label, n=n)
    if kind is VectorKind.INT:
        if not np.issubdtype(arr.dtype, np.integer):
            if not np.all(np.mod(arr, 1) == 0):
                raise errors.InvalidRangeError("Integer vectors need integral values")
            arr = arr.astype(np.int64)
        return HyperVector(kind=kind, data=arr, label=label, n=n)

    arr = arr.astype(np.float64)
    if kind is VectorKind.GRADED:
        l, u = bounds or GRADED_BOUNDS
        _check_graded_bounds(l, u)
        stored = arr
    else:
        l, u = bounds or GRADED_BIPOLAR_BOUNDS
        _check_graded_bipolar_bounds(l, u)
        stored = fuzzy.bipolar_to_graded(arr)
    if not np.all((arr >= l) & (arr <= u)):
        raise errors.InvalidRangeError(
            f"{kind.value} values must lie within [{l}, {u}]"
        )
    return HyperVector(kind=kind, data=stored, label=label, bounds=(l, u))
