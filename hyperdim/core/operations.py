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

"""Binding, bundling and shifting of hypervectors.

Binding and unbinding pick their formula from the element kind of the
operands:

- binary elements: XOR, its own inverse.
- numeric elements: elementwise multiplication, its own inverse on {-1, +1}
  (bipolar vectors multiply as XNOR of their bits).
- graded elements: fuzzy XOR. Unbinding uses the inverse of fuzzy XOR with
  the known key, so `unbind(bind(u, v), v)` recovers `u` but unbinding twice
  does not. Binding three or more vectors folds left; for fuzzy XOR other
  groupings agree only up to floating-point rounding.

Bundling picks its formula from the vector kind itself.
"""

from __future__ import annotations

import functools
from typing import Sequence

from absl import logging
import numpy as np

from hyperdim.core import bitvector
from hyperdim.core import config
from hyperdim.core import errors
from hyperdim.core import fuzzy
from hyperdim.core import vectors as vec

__all__ = [
    "bind",
    "unbind",
    "bundle",
    "shift",
    "shift_",
]

HyperVector = vec.HyperVector
VectorKind = vec.VectorKind
ElementKind = vec.ElementKind


def _result(like: HyperVector, data, label: str | None = None) -> HyperVector:
    """Build a fresh vector of the same kind as `like` around `data`."""
    bounds = None
    if like.kind is VectorKind.GRADED:
        bounds = vec.GRADED_BOUNDS
    elif like.kind is VectorKind.GRADED_BIPOLAR:
        bounds = vec.GRADED_BIPOLAR_BOUNDS
    return HyperVector(
        kind=like.kind, data=data, label=label, p=like.p, bounds=bounds
    )


def _bind_binary(u: HyperVector, v: HyperVector):
    return u.data ^ v.data


def _bind_numeric(u: HyperVector, v: HyperVector):
    if u.kind is VectorKind.BIPOLAR:
        return u.data.xnor(v.data)
    if u.kind is VectorKind.SPARSE:
        return u.data.multiply(v.data).tocsr()
    return u.data * v.data


def _bind_graded(u: HyperVector, v: HyperVector):
    if u.kind is VectorKind.GRADED_BIPOLAR:
        return fuzzy.bipolar_to_graded(
            fuzzy.fuzzy_xor_bipolar(u.to_array(), v.to_array())
        )
    return fuzzy.fuzzy_xor(u.data, v.data)


def _unbind_graded(bound: HyperVector, key: HyperVector):
    if bound.kind is VectorKind.GRADED_BIPOLAR:
        stored = fuzzy.bipolar_to_graded(
            fuzzy.inverse_fuzzy_xor_bipolar(bound.to_array(), key.to_array())
        )
    else:
        stored = fuzzy.inverse_fuzzy_xor(bound.data, key.data)
    # Inputs that no bind could have produced invert outside the domain
    return np.clip(stored, 0.0, 1.0)


_BINDERS = {
    ElementKind.BINARY: _bind_binary,
    ElementKind.NUMERIC: _bind_numeric,
    ElementKind.GRADED: _bind_graded,
}

_UNBINDERS = {
    ElementKind.BINARY: _bind_binary,
    ElementKind.NUMERIC: _bind_numeric,
    ElementKind.GRADED: _unbind_graded,
}


def _bind_pair(u: HyperVector, v: HyperVector) -> HyperVector:
    vec.check_compatible((u, v))
    data = _BINDERS[u.element_kind](u, v)
    label = None
    if u.label and v.label:
        label = f"({u.label}⊗{v.label})"
    return _result(u, data, label)


def bind(u: HyperVector, v: HyperVector, *more: HyperVector) -> HyperVector:
    """Bind hypervectors into one that is dissimilar to every input.

    Binding creates role-filler pairs that `unbind` can take apart again.
    More than two vectors are bound left to right.

    Args:
        u: First hypervector.
        v: Second hypervector.
        *more: Further hypervectors to bind onto the result.

    Returns:
        The bound hypervector, of the same kind as the inputs.

    Raises:
        DimensionMismatchError: If the vectors differ in kind or dimension.
    """
    return functools.reduce(_bind_pair, more, _bind_pair(u, v))


def unbind(bound: HyperVector, key: HyperVector) -> HyperVector:
    """Unbind a key from a bound vector to recover the value.

    Binary and numeric binding are self-inverse, so unbinding is the same
    operation as binding. Graded vectors invert fuzzy XOR with the known key
    instead, which is not symmetric in its arguments. Graded results are
    clipped to their domain.

    Args:
        bound: The bound hypervector.
        key: The key vector to unbind.

    Returns:
        The unbound value vector.

    Raises:
        DimensionMismatchError: If the vectors differ in kind or dimension.
        UnrecoverableUnbindError: If a graded key holds an element at the
            midpoint of its domain.
    """
    vec.check_compatible((bound, key))
    return _result(bound, _UNBINDERS[bound.element_kind](bound, key))


def _bundle_bits(
    vectors: Sequence[HyperVector],
    even_resolve: str,
    rng: np.random.Generator | None,
):
    dimension = vectors[0].dimension
    counts = np.zeros(dimension, dtype=np.int64)
    for v in vectors:
        counts += np.unpackbits(v.data.words, count=dimension)

    if len(vectors) % 2 == 0:
        # One extra vote per position breaks ties
        if even_resolve == "random":
            if rng is None:
                rng = config.get_rng()
            counts += rng.integers(0, 2, size=dimension)
        elif even_resolve == "positive":
            counts += 1

    majority = counts > len(vectors) / 2
    return bitvector.PackedBits.from_bools(majority)


def _bundle_real(vectors: Sequence[HyperVector]):
    total = np.sum([v.data for v in vectors], axis=0)
    norm = np.linalg.norm(total)
    if norm == 0:
        raise errors.InvalidArgumentError("Cannot normalize a zero bundle")
    return (total / norm).astype(vectors[0].data.dtype)


def bundle(
    *vectors: HyperVector | Sequence[HyperVector],
    even_resolve: str | None = None,
    rng: np.random.Generator | None = None,
) -> HyperVector:
    """Bundle hypervectors into a superposition similar to all inputs.

    The aggregation depends on the vector kind:

    - binary and bipolar: elementwise majority vote. With an even number of
      vectors one tie-break vote is added per position, chosen by
      `even_resolve`: "random" (a fresh random bit), "positive" (always set)
      or "negative" (never set).
    - integer: elementwise sum.
    - real: elementwise sum scaled to unit norm.
    - graded: `three_pi` folded over the vectors.
    - graded bipolar: `three_pi_bipolar` folded over the vectors.

    Integer and real results count the bundled vectors in `n`.

    Args:
        *vectors: Hypervectors to bundle, or a single sequence of them.
        even_resolve: Tie-break policy (default from the configuration).
        rng: Optional numpy random generator for random tie-breaking.

    Returns:
        The bundled hypervector.

    Raises:
        InvalidArgumentError: If no vectors are given or `even_resolve` is
            unknown.
        DimensionMismatchError: If the vectors differ in kind or dimension.
        OperationNotImplementedError: For sparse vectors.
    """
    if len(vectors) == 1 and not isinstance(vectors[0], HyperVector):
        vectors = tuple(vectors[0])
    if not vectors:
        raise errors.InvalidArgumentError("Cannot bundle empty vector list")
    if even_resolve is None:
        even_resolve = config.get_config().even_resolve
    if even_resolve not in config.EVEN_RESOLVE_POLICIES:
        raise errors.InvalidArgumentError(
            f"Unknown even_resolve policy: {even_resolve!r}, expected one of "
            f"{config.EVEN_RESOLVE_POLICIES}"
        )
    vec.check_compatible(vectors)

    first = vectors[0]
    logging.debug(
        "Bundling %d %s vectors, dim=%d", len(vectors), first.kind.value,
        first.dimension,
    )
    labels = [v.label for v in vectors if v.label]
    label = "⊕".join(labels) if labels else None
    multiplicity = sum(v.n for v in vectors)

    if first.kind in vec.BIT_KINDS:
        data = _bundle_bits(vectors, even_resolve, rng)
    elif first.kind is VectorKind.INT:
        data = np.sum([v.data for v in vectors], axis=0)
    elif first.kind is VectorKind.REAL:
        data = _bundle_real(vectors)
    elif first.element_kind is ElementKind.GRADED:
        # three_pi_bipolar on read-out values is three_pi on stored ones
        data = np.array(functools.reduce(fuzzy.three_pi, [v.data for v in vectors]))
    else:
        raise errors.OperationNotImplementedError(
            f"Bundling is not defined for {first.kind.value} vectors"
        )

    result = _result(first, data, label)
    if first.kind in (VectorKind.INT, VectorKind.REAL):
        result.n = multiplicity
    return result


def shift_(v: HyperVector, k: int = 1) -> None:
    """Circularly rotate a vector right by `k` positions, in place.

    Element `i` moves to position `(i + k) mod N`. The vector's storage is
    modified; callers must not share it while shifting.
    """
    k %= v.dimension
    if v.kind in vec.BIT_KINDS:
        v.data.roll_(k)
    elif v.kind is VectorKind.SPARSE:
        indices = v.data.indices
        indices[:] = (indices + k) % v.dimension
        v.data.has_sorted_indices = False
        v.data.sort_indices()
    else:
        v.data[:] = np.roll(v.data, k)


def shift(v: HyperVector, k: int = 1) -> HyperVector:
    """Return a copy of `v` circularly rotated right by `k` positions.

    `shift(shift(v, k), N - k) == v` for every `k`.
    """
    result = v.copy()
    shift_(result, k)
    return result
