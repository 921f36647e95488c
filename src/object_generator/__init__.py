"""Synthetic object payloads for storage benchmarks."""

from object_generator.config import ConfigurationError, GeneratorConfig
from object_generator.core.exceptions import GeneratorError, RandomSourceError
from object_generator.models import GeneratedObject
from object_generator.services import (
    RandomSource,
    Source,
    TextSource,
    new_random_source,
    new_source,
    new_text_source,
    new_worker_sources,
)

__all__ = [
    "ConfigurationError",
    "GeneratedObject",
    "GeneratorConfig",
    "GeneratorError",
    "RandomSource",
    "RandomSourceError",
    "Source",
    "TextSource",
    "new_random_source",
    "new_source",
    "new_text_source",
    "new_worker_sources",
]
