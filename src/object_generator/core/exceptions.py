"""
Exceptions raised while producing objects.
"""

from __future__ import annotations


class GeneratorError(Exception):
    """
    Base exception for generator errors.

    Attributes:
        error: Machine-readable error code
        message: Human-readable description
        details: Additional context
    """

    # nosemgrep: no-default-parameter-values (optional details for exceptions)
    def __init__(
        self,
        error: str,
        message: str,
        details: dict[str, object] | None = None,
    ) -> None:
        self.error = error
        self.message = message
        if details is None:
            self.details: dict[str, object] = {}
        else:
            self.details = details
        super().__init__(message)


class RandomSourceError(GeneratorError):
    """
    The platform's secure random source failed.

    Aborts the object being produced; counter and seed buffer state
    are left untouched.
    """

    def __init__(self, requested: int, reason: str) -> None:
        super().__init__(
            "random_source_failure",
            f"Secure random source failed reading {requested} bytes: {reason}",
            {"requested": requested, "reason": reason},
        )
