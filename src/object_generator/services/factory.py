"""
Source construction from configuration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from object_generator.services.base import new_rng, seed_entropy
from object_generator.services.random_source import RandomSource
from object_generator.services.text_source import TextSource

if TYPE_CHECKING:
    from object_generator.config import GeneratorConfig
    from object_generator.services.base import Source


def new_random_source(
    config: GeneratorConfig,
    rng: np.random.Generator | None = None,
) -> RandomSource:
    """
    Create a random data source.

    Raises:
        ConfigurationError: If the block size is not positive after capping
    """
    return RandomSource(config, rng)


def new_text_source(
    config: GeneratorConfig,
    rng: np.random.Generator | None = None,
) -> TextSource:
    """
    Create a compressible text data source.

    Raises:
        ConfigurationError: If the block size is not positive after capping
    """
    return TextSource(config, rng)


def new_source(config: GeneratorConfig, rng: np.random.Generator | None = None) -> Source:
    """Create the source variant selected by `config.source`."""
    if config.source == "random":
        return new_random_source(config, rng)
    return new_text_source(config, rng)


def new_worker_sources(config: GeneratorConfig, workers: int) -> list[Source]:
    """
    Create one independent source per worker.

    Each source gets a generator spawned from the configured seed, so a
    seeded run is reproducible per worker index and no generator state is
    shared between threads.

    Args:
        config: Generator configuration
        workers: Number of sources to create (must be > 0)

    Raises:
        ValueError: If workers is not positive
        ConfigurationError: If the block size is not positive after capping
    """
    if workers <= 0:
        raise ValueError(f"Workers must be positive, got {workers}")

    children = np.random.SeedSequence(seed_entropy(config.seed)).spawn(workers)
    return [new_source(config, new_rng(child)) for child in children]
