"""
Compressible text-like data source.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from object_generator.services import synthesizer
from object_generator.services.base import Source, capped_block_size
from object_generator.services.circular import CircularReader

if TYPE_CHECKING:
    import numpy as np

    from object_generator.config import GeneratorConfig
    from object_generator.services.circular import CircularStream


class TextSource(Source):
    """
    Produces objects whose compression ratio follows the configuration.

    The payload is assembled from synthesizer calls of at most one
    compression window each. There is no seed buffer: every object gets
    a reader over its own payload, and `block_size` is only validated.
    """

    content_type = "text/plain"
    extension = "txt"
    label = "Text data"

    def __init__(self, config: GeneratorConfig, rng: np.random.Generator | None = None) -> None:
        self.block_size = capped_block_size("text", config.text.block_size, config.total_size)
        super().__init__(config, rng)
        self._logger.info(
            "Text source created",
            extra={
                "block_size": self.block_size,
                "compression_ratio": config.compression_ratio,
                "compression_window": config.compression_window,
                "prefix": self.prefix,
                "policy": self.describe(),
            },
        )

    def _build_stream(self, size: int, offset: int) -> CircularStream:
        window = self.config.compression_window
        data = bytearray()
        while len(data) < size:
            chunk = min(size - len(data), window)
            data += synthesizer.generate(chunk, self.config.compression_ratio, window)
        # The reader's exported view pins the bytearray; it is never resized again
        return CircularReader(data).reset(size, offset)
