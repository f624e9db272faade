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

"""Packed bit arrays backing binary and bipolar hypervectors.

Bits are packed eight to a byte with `np.packbits` (most significant bit
first). Padding bits past the logical length are kept at zero, so byte-level
popcounts never need masking.
"""

from __future__ import annotations

import numpy as np

__all__ = ["PackedBits"]

# Number of set bits for every byte value
_POPCOUNT = np.array([bin(i).count("1") for i in range(256)], dtype=np.uint8)


class PackedBits:
    """A fixed-length sequence of bits stored as a packed uint8 array.

    Attributes:
        words: Packed uint8 array of shape (ceil(length / 8),).
        length: Number of logical bits.
    """

    __slots__ = ("words", "length")

    def __init__(self, words: np.ndarray, length: int):
        if words.dtype != np.uint8:
            raise TypeError(f"Expected uint8 words, got {words.dtype}")
        if words.shape != ((length + 7) // 8,):
            raise ValueError(
                f"Shape mismatch: expected ({(length + 7) // 8},), got {words.shape}"
            )
        self.words = words
        self.length = length
        self._clear_padding()

    @classmethod
    def from_bools(cls, bits) -> "PackedBits":
        """Pack a sequence of truth values."""
        bits = np.asarray(bits, dtype=bool)
        return cls(np.packbits(bits), len(bits))

    @classmethod
    def random(cls, length: int, rng: np.random.Generator) -> "PackedBits":
        """Draw `length` independent fair-coin bits."""
        words = rng.integers(0, 256, size=(length + 7) // 8, dtype=np.uint8)
        return cls(words, length)

    def _clear_padding(self) -> None:
        pad = -self.length % 8
        if pad:
            self.words[-1] &= np.uint8((0xFF << pad) & 0xFF)

    def to_bools(self) -> np.ndarray:
        """Unpack into a boolean array of the logical length."""
        return np.unpackbits(self.words, count=self.length).astype(bool)

    def popcount(self) -> int:
        """Number of set bits."""
        return int(_POPCOUNT[self.words].sum(dtype=np.int64))

    def copy(self) -> "PackedBits":
        return PackedBits(self.words.copy(), self.length)

    def roll(self, shift: int) -> "PackedBits":
        """Circularly rotate right by `shift` positions into a new array."""
        bits = np.roll(np.unpackbits(self.words, count=self.length), shift)
        return PackedBits(np.packbits(bits), self.length)

    def roll_(self, shift: int) -> None:
        """Circularly rotate right by `shift` positions in place."""
        self.words[:] = self.roll(shift).words

    def __len__(self) -> int:
        return self.length

    def __getitem__(self, i: int) -> bool:
        if i < 0:
            i += self.length
        if not 0 <= i < self.length:
            raise IndexError(f"bit index {i} out of range for length {self.length}")
        return bool((self.words[i >> 3] >> (7 - (i & 7))) & 1)

    def _check_length(self, other: "PackedBits") -> None:
        if self.length != other.length:
            raise ValueError(
                f"Cannot combine bit arrays of different lengths: "
                f"{self.length} vs {other.length}"
            )

    def __xor__(self, other: "PackedBits") -> "PackedBits":
        self._check_length(other)
        return PackedBits(np.bitwise_xor(self.words, other.words), self.length)

    def __and__(self, other: "PackedBits") -> "PackedBits":
        self._check_length(other)
        return PackedBits(np.bitwise_and(self.words, other.words), self.length)

    def __or__(self, other: "PackedBits") -> "PackedBits":
        self._check_length(other)
        return PackedBits(np.bitwise_or(self.words, other.words), self.length)

    def __invert__(self) -> "PackedBits":
        return PackedBits(np.bitwise_not(self.words), self.length)

    def xnor(self, other: "PackedBits") -> "PackedBits":
        """Bitwise equality: set where both bits agree."""
        return ~(self ^ other)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PackedBits):
            return NotImplemented
        return self.length == other.length and np.array_equal(
            self.words, other.words
        )

    __hash__ = None

    def __repr__(self) -> str:
        return f"PackedBits(length={self.length}, popcount={self.popcount()})"
