"""Object sources and the data synthesis they rely on."""

from object_generator.services.base import Source
from object_generator.services.circular import CircularReader, CircularStream
from object_generator.services.factory import (
    new_random_source,
    new_source,
    new_text_source,
    new_worker_sources,
)
from object_generator.services.random_source import RandomSource
from object_generator.services.text_source import TextSource

__all__ = [
    "CircularReader",
    "CircularStream",
    "RandomSource",
    "Source",
    "TextSource",
    "new_random_source",
    "new_source",
    "new_text_source",
    "new_worker_sources",
]
