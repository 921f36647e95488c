"""Core infrastructure components."""

from object_generator.core.exceptions import GeneratorError, RandomSourceError

__all__ = ["GeneratorError", "RandomSourceError"]
