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

"""Global configuration and random sources for hypervector operations.

The configuration holds the defaults every constructor and bundling call
falls back to. Random generators are kept per thread, so concurrent
construction never shares a `numpy.random.Generator` between threads.
"""

from __future__ import annotations

import dataclasses
import threading

from absl import logging
import numpy as np

from hyperdim.core import errors

__all__ = [
    "DEFAULT_DIM",
    "EVEN_RESOLVE_POLICIES",
    "HDCConfig",
    "configure",
    "get_config",
    "get_rng",
]

# Default dimension for hypervectors
DEFAULT_DIM = 10000

# Tie-break policies accepted by binary bundling
EVEN_RESOLVE_POLICIES = ("random", "positive", "negative")


@dataclasses.dataclass(frozen=True)
class HDCConfig:
    """Configuration for hypervector construction and bundling.

    Attributes:
        dimension: Default dimensionality of new vectors (default 10000).
        seed: Seed for the per-thread random generators, or None for fresh
            entropy.
        even_resolve: Default tie-break policy when bundling an even number
            of binary or bipolar vectors.
    """

    dimension: int = DEFAULT_DIM
    seed: int | None = None
    even_resolve: str = "random"

    def __post_init__(self):
        """Validate configuration."""
        if self.dimension < 1:
            raise errors.InvalidArgumentError(
                f"dimension must be positive, got {self.dimension}"
            )
        if self.even_resolve not in EVEN_RESOLVE_POLICIES:
            raise errors.InvalidArgumentError(
                f"Unknown even_resolve policy: {self.even_resolve!r}"
            )


_config = HDCConfig()
_generation = 0
_seed_sequence = np.random.SeedSequence(_config.seed)
_lock = threading.Lock()
_local = threading.local()


def configure(**overrides) -> HDCConfig:
    """Replace the global configuration.

    Args:
        **overrides: Fields of `HDCConfig` to change.

    Returns:
        The new configuration.
    """
    global _config, _generation, _seed_sequence

    if overrides:
        new_config = dataclasses.replace(_config, **overrides)
        with _lock:
            _config = new_config
            _seed_sequence = np.random.SeedSequence(new_config.seed)
            _generation += 1
        if "seed" in overrides:
            logging.warning(
                "Random generators reset with seed=%s", _config.seed
            )
    return _config


def get_config() -> HDCConfig:
    """Get current configuration."""
    return _config


def get_rng() -> np.random.Generator:
    """Return the random generator of the calling thread.

    Each thread's generator is spawned from one `SeedSequence` per
    configuration, so threads draw independent streams even under a fixed
    seed. The generator is rebuilt whenever `configure` has run since it was
    created, so a new seed takes effect on the next draw.
    """
    if getattr(_local, "generation", None) != _generation:
        with _lock:
            (child,) = _seed_sequence.spawn(1)
            generation = _generation
        _local.rng = np.random.default_rng(child)
        _local.generation = generation
    return _local.rng
