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

"""Exceptions raised by hypervector construction and algebra.

All errors derive from `HDCError` and from the builtin exception a caller
would otherwise expect (`ValueError`, `ArithmeticError`,
`NotImplementedError`), so existing `except ValueError` handlers keep working.
"""

from __future__ import annotations

__all__ = [
    "HDCError",
    "InvalidRangeError",
    "InvalidArgumentError",
    "DimensionMismatchError",
    "UnrecoverableUnbindError",
    "OperationNotImplementedError",
]


class HDCError(Exception):
    """Base class for all hypervector errors."""


class InvalidRangeError(HDCError, ValueError):
    """Bounds or element values fall outside the domain of a vector kind."""


class InvalidArgumentError(HDCError, ValueError):
    """An argument is not one of the accepted values."""


class DimensionMismatchError(HDCError, ValueError):
    """Operands differ in length or in vector kind."""


class UnrecoverableUnbindError(HDCError, ArithmeticError):
    """Graded unbinding hit a key element with a zero denominator."""


class OperationNotImplementedError(HDCError, NotImplementedError):
    """No formula is defined for this vector kind."""
