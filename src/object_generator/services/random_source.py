"""
Incompressible random data source.

Two strategies are supported:

- resynthesize: every object gets `size` fresh bytes from the secure
  random source. Costs one allocation and one urandom read per object,
  but no two objects share content.
- reuse: objects cycle through the seed buffer drawn at construction,
  starting at a random offset. No per-object allocation; content repeats
  with the seed's period and is reproducible under a fixed seed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from object_generator.services.base import Source, capped_block_size
from object_generator.services.circular import CircularReader, new_seed_buffer
from object_generator.services.synthesizer import secure_bytes

if TYPE_CHECKING:
    import numpy as np

    from object_generator.config import GeneratorConfig
    from object_generator.services.circular import CircularStream


class RandomSource(Source):
    """Produces objects of random, incompressible bytes."""

    content_type = "application/octet-stream"
    extension = "rnd"
    label = "Random data"

    def __init__(self, config: GeneratorConfig, rng: np.random.Generator | None = None) -> None:
        block_size = capped_block_size("random", config.random.block_size, config.total_size)
        super().__init__(config, rng)
        self.strategy = config.random.strategy
        self._seed = CircularReader(new_seed_buffer(self._rng, block_size))
        self._logger.info(
            "Random source created",
            extra={
                "block_size": block_size,
                "strategy": self.strategy,
                "prefix": self.prefix,
                "policy": self.describe(),
            },
        )

    def _draw_offset(self) -> int:
        if self.strategy != "reuse":
            return 0
        return int(self._rng.integers(0, len(self._seed)))

    def _build_stream(self, size: int, offset: int) -> CircularStream:
        if self.strategy == "reuse":
            return self._seed.reset(size, offset)
        return CircularReader(secure_bytes(size)).reset(size)
