"""
Compressible data synthesis.

Output is built from a block of secure random bytes repeated
`compression_ratio` times, so a compressor sees roughly one unique byte
per `compression_ratio` output bytes. Redundancy never spans more than
`compression_window` bytes: each window-sized stride gets its own
freshly drawn unique block.
"""

from __future__ import annotations

import os

from object_generator.core.exceptions import RandomSourceError
from object_generator.logging import get_logger


def secure_bytes(size: int) -> bytes:
    """
    Read `size` bytes from the platform's secure random source.

    os.urandom is safe to call from several threads at once.

    Raises:
        RandomSourceError: If the platform source fails
    """
    try:
        return os.urandom(size)
    except OSError as e:
        get_logger(__name__).error(
            "Secure random source failed",
            extra={"requested": size, "reason": str(e)},
        )
        raise RandomSourceError(size, str(e)) from e


def _compressible_stride(size: int, compression_ratio: int) -> bytes:
    """Build one window-bounded stride of exactly `size` bytes."""
    unique_len, remainder = divmod(size, compression_ratio)

    # Smaller than one ratio unit: a single unique byte repeated
    if unique_len == 0:
        return secure_bytes(1) * size

    built = secure_bytes(unique_len) * compression_ratio
    # Pad from the already built output, not from the unique block
    return built + built[:remainder]


def generate(req_size: int, compression_ratio: int, compression_window: int) -> bytes:
    """
    Produce `req_size` bytes with the requested compressibility.

    Args:
        req_size: Exact number of bytes to return
        compression_ratio: Target output/unique size ratio; 0 or less
            returns fully incompressible data
        compression_window: Largest span over which data repeats

    Returns:
        Bytes of length exactly `req_size`

    Raises:
        ValueError: On a negative size or a non-positive window
        RandomSourceError: If the secure random source fails
    """
    if req_size < 0:
        raise ValueError(f"Requested size must be >= 0, got {req_size}")

    if compression_ratio <= 0:
        return secure_bytes(req_size)

    if compression_window <= 0:
        raise ValueError(f"Compression window must be positive, got {compression_window}")

    if req_size <= compression_window:
        return _compressible_stride(req_size, compression_ratio)

    out = bytearray()
    while len(out) < req_size:
        stride = min(compression_window, req_size - len(out))
        out += _compressible_stride(stride, compression_ratio)
    return bytes(out)
