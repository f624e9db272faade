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

"""Elementwise fuzzy-logic algebra for graded hypervectors.

Graded vectors hold truth values in [0, 1]; graded bipolar vectors hold the
same values mapped onto [-1, 1]. The functions below accept scalars or numpy
arrays and broadcast like numpy ufuncs.
"""

from __future__ import annotations

import numpy as np

from hyperdim.core import errors

__all__ = [
    "bipolar_to_graded",
    "graded_to_bipolar",
    "three_pi",
    "fuzzy_xor",
    "three_pi_bipolar",
    "fuzzy_xor_bipolar",
    "inverse_fuzzy_xor",
    "inverse_fuzzy_xor_bipolar",
]


def bipolar_to_graded(x):
    """Map a bipolar value in [-1, 1] onto the [0, 1] interval."""
    return (x + 1) / 2


def graded_to_bipolar(x):
    """Map a graded value in [0, 1] onto the [-1, 1] interval."""
    return 2 * x - 1


def three_pi(x, y):
    """Fuzzy three-valued product of two graded values.

    Computes `x*y / (x*y + (1-x)*(1-y))`. Where one operand is exactly 0 and
    the other exactly 1 the quotient is 0/0; the result there is 0.

    Args:
        x: Graded value(s) in [0, 1].
        y: Graded value(s) in [0, 1].

    Returns:
        The product, with the shape of the broadcast operands.
    """
    x, y = np.broadcast_arrays(
        np.asarray(x, dtype=np.float64), np.asarray(y, dtype=np.float64)
    )
    numerator = x * y
    denominator = numerator + (1 - x) * (1 - y)
    degenerate = np.abs(x - y) == 1
    result = np.divide(
        numerator, denominator, out=np.zeros_like(numerator), where=~degenerate
    )
    return result[()]


def fuzzy_xor(x, y):
    """Fuzzy exclusive-or: `(1-x)*y + x*(1-y)`."""
    return (1 - x) * y + x * (1 - y)


def three_pi_bipolar(x, y):
    """`three_pi` for values on [-1, 1]."""
    return graded_to_bipolar(three_pi(bipolar_to_graded(x), bipolar_to_graded(y)))


def fuzzy_xor_bipolar(x, y):
    """`fuzzy_xor` for values on [-1, 1]."""
    return graded_to_bipolar(fuzzy_xor(bipolar_to_graded(x), bipolar_to_graded(y)))


def inverse_fuzzy_xor(z, x):
    """Recover `y` from `z = fuzzy_xor(x, y)` and the known operand `x`.

    Args:
        z: Result(s) of a fuzzy-XOR binding.
        x: The known operand(s).

    Returns:
        `(z - x) / (1 - 2x)`.

    Raises:
        UnrecoverableUnbindError: If any element of `x` equals 0.5, which
            erases all information about `y`.
    """
    z = np.asarray(z, dtype=np.float64)
    x = np.asarray(x, dtype=np.float64)
    denominator = 1 - 2 * x
    if np.any(denominator == 0):
        raise errors.UnrecoverableUnbindError(
            f"Cannot unbind: {int(np.count_nonzero(denominator == 0))} key "
            "element(s) equal 0.5"
        )
    return ((z - x) / denominator)[()]


def inverse_fuzzy_xor_bipolar(z, x):
    """`inverse_fuzzy_xor` for values on [-1, 1]; fails where `x` is 0."""
    return graded_to_bipolar(
        inverse_fuzzy_xor(bipolar_to_graded(z), bipolar_to_graded(x))
    )
