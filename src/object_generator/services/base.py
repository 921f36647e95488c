"""
Common machinery for object sources.

Every source owns its own seeded generator. Counter updates and every
draw from that generator happen under the source's lock, so one source
can be shared between threads; for lock-free parallelism give each
worker its own source (see new_worker_sources).
"""

from __future__ import annotations

import posixpath
import threading
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import numpy as np

from object_generator.config import ConfigurationError
from object_generator.logging import get_logger
from object_generator.models import GeneratedObject

if TYPE_CHECKING:
    from object_generator.config import GeneratorConfig
    from object_generator.services.circular import CircularStream

NAME_SUFFIX_LENGTH = 16

_ASCII_ALPHABET = np.frombuffer(
    b"abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789",
    dtype=np.uint8,
)


def random_ascii(rng: np.random.Generator, length: int) -> str:
    """Draw an alphanumeric string of `length` characters."""
    return rng.choice(_ASCII_ALPHABET, size=length).tobytes().decode("ascii")


_UINT64_MASK = 0xFFFF_FFFF_FFFF_FFFF


def seed_entropy(seed: int | None) -> int | None:
    """
    Map a signed 64-bit seed onto the non-negative range numpy accepts.

    Negative seeds are taken as their two's complement bit pattern, so
    -1 and 2**64 - 1 seed the same stream.
    """
    if seed is None:
        return None
    return seed & _UINT64_MASK


def new_rng(seed: int | np.random.SeedSequence | None) -> np.random.Generator:
    """Create an independent generator; OS entropy when seed is None."""
    if isinstance(seed, np.random.SeedSequence):
        return np.random.default_rng(seed)
    return np.random.default_rng(seed_entropy(seed))


def capped_block_size(label: str, block_size: int, total_size: int) -> int:
    """
    Cap a configured block size to the total object size.

    Raises:
        ConfigurationError: If the capped size is not positive
    """
    size = min(block_size, total_size)
    if size <= 0:
        raise ConfigurationError(f"{label}: size <= 0, got {size}")
    return size


class Source(ABC):
    """Produces named, sized objects with ready-to-read streams."""

    content_type: str
    extension: str
    label: str

    def __init__(self, config: GeneratorConfig, rng: np.random.Generator | None) -> None:
        self.config = config
        self._rng = rng if rng is not None else new_rng(config.seed)
        self._lock = threading.Lock()
        self._counter = 0
        self._prefix = self._make_prefix()
        self._logger = get_logger(__name__)

    @property
    def prefix(self) -> str:
        """Key prefix shared by every object of this source."""
        return self._prefix

    def _make_prefix(self) -> str:
        opts = self.config.prefix
        if opts.random_length <= 0:
            return opts.custom
        return posixpath.join(opts.custom, random_ascii(self._rng, opts.random_length))

    def _object_name(self, counter: int, suffix: str) -> str:
        name = f"{counter}.{suffix}.{self.extension}"
        if not self._prefix:
            return name
        return f"{self._prefix}/{name}"

    def _draw_offset(self) -> int:
        """Per-object draw taken while the lock is held."""
        return 0

    @abstractmethod
    def _build_stream(self, size: int, offset: int) -> CircularStream:
        """Synthesize the payload of one object."""

    def produce_object(self) -> GeneratedObject:
        """
        Produce the next object.

        Raises:
            RandomSourceError: If the secure random source fails; the
                counter keeps advancing and no state is left half-updated
        """
        with self._lock:
            self._counter += 1
            counter = self._counter
            size = self.config.size_for_object(self._rng)
            suffix = random_ascii(self._rng, NAME_SUFFIX_LENGTH)
            offset = self._draw_offset()

        stream = self._build_stream(size, offset)
        obj = GeneratedObject(
            name=self._object_name(counter, suffix),
            content_type=self.content_type,
            size=size,
            prefix=self._prefix,
            stream=stream,
        )
        self._logger.debug(
            "Object produced",
            extra={"object_name": obj.name, "size": obj.size},
        )
        return obj

    def describe(self) -> str:
        """Summary of the size policy, for logging."""
        if self.config.randomize_size:
            return f"{self.label}; random size up to {self.config.total_size} bytes"
        return f"{self.label}; {self.config.total_size} bytes total"

    def __str__(self) -> str:
        return self.describe()
