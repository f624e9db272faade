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

"""Similarity measures between hypervectors."""

from __future__ import annotations

import functools
from typing import Callable

import numpy as np

from hyperdim.core import errors
from hyperdim.core import vectors as vec

__all__ = [
    "sim",
    "tanimoto",
    "cosine",
    "bipolar_similarity",
    "hamming",
]

HyperVector = vec.HyperVector
VectorKind = vec.VectorKind


def tanimoto(u: HyperVector, v: HyperVector) -> float:
    """Tanimoto coefficient `u.v / (u.u + v.v - u.v)`.

    Binary vectors are compared through popcounts of their packed bits. Two
    all-zero vectors are identical and score 1.0.

    Raises:
        DimensionMismatchError: If the vectors differ in kind or dimension.
    """
    vec.check_compatible((u, v))
    if u.kind is VectorKind.BINARY:
        uu = u.data.popcount()
        vv = v.data.popcount()
        uv = (u.data & v.data).popcount()
    else:
        x = u.to_array().astype(np.float64)
        y = v.to_array().astype(np.float64)
        uu, vv, uv = np.dot(x, x), np.dot(y, y), np.dot(x, y)
    denominator = uu + vv - uv
    if denominator == 0:
        return 1.0
    return float(uv / denominator)


def bipolar_similarity(u: HyperVector, v: HyperVector) -> float:
    """Cosine similarity of bipolar vectors from their packed bits.

    With `m` positions where the bits agree this is `(2m - N) / N`, ranging
    from -1 (opposite) to +1 (identical).

    Raises:
        DimensionMismatchError: If the vectors differ in kind or dimension.
        OperationNotImplementedError: If the vectors are not bipolar.
    """
    vec.check_compatible((u, v))
    if u.kind is not VectorKind.BIPOLAR:
        raise errors.OperationNotImplementedError(
            f"Bit-level cosine needs bipolar vectors, got {u.kind.value}"
        )
    n = u.dimension
    agree = n - (u.data ^ v.data).popcount()
    return (2 * agree - n) / n


def cosine(u: HyperVector, v: HyperVector) -> float:
    """Cosine similarity of the element values.

    Raises:
        DimensionMismatchError: If the vectors differ in kind or dimension.
        InvalidArgumentError: If either vector has zero norm.
    """
    vec.check_compatible((u, v))
    norms = u.norm() * v.norm()
    if norms == 0:
        raise errors.InvalidArgumentError(
            "Cosine similarity is undefined for a zero vector"
        )
    if u.kind is VectorKind.SPARSE:
        dot = u.data.astype(np.float64).multiply(v.data.astype(np.float64)).sum()
    else:
        dot = np.dot(
            u.to_array().astype(np.float64), v.to_array().astype(np.float64)
        )
    return float(dot / norms)


_SIMILARITIES = {
    VectorKind.BINARY: tanimoto,
    VectorKind.BIPOLAR: bipolar_similarity,
}


def sim(
    u: HyperVector, v: HyperVector | None = None
) -> float | Callable[[HyperVector], float]:
    """Compute the similarity appropriate to the vectors' kind.

    Binary vectors use the Tanimoto coefficient, bipolar vectors the
    bit-level cosine, and every other kind the cosine of its values.

    Args:
        u: First hypervector.
        v: Second hypervector. When omitted, a function comparing `u` with
            its argument is returned, e.g. for `map(sim(probe), memory)`.

    Returns:
        The similarity, or a one-argument function computing it.

    Raises:
        DimensionMismatchError: If the vectors differ in kind or dimension.
    """
    if v is None:
        return functools.partial(sim, u)
    return _SIMILARITIES.get(u.kind, cosine)(u, v)


def hamming(u, v) -> float:
    """Hamming similarity `1 - mismatches / N`.

    Accepts two hypervectors or any two equal-length sequences. Bit-packed
    vectors count mismatches with a popcount.

    Raises:
        DimensionMismatchError: If the lengths (or vector kinds) differ.
        InvalidArgumentError: If the sequences are empty.
    """
    if isinstance(u, HyperVector) and isinstance(v, HyperVector):
        vec.check_compatible((u, v))
        if u.kind in vec.BIT_KINDS:
            return 1 - (u.data ^ v.data).popcount() / u.dimension
        u, v = u.to_array(), v.to_array()

    x, y = np.asarray(u), np.asarray(v)
    if len(x) != len(y):
        raise errors.DimensionMismatchError(
            f"Cannot compare sequences of different lengths: {len(x)} vs {len(y)}"
        )
    if len(x) == 0:
        raise errors.InvalidArgumentError("Cannot compare empty sequences")
    return 1 - np.count_nonzero(x != y) / len(x)
