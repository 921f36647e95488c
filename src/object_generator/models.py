"""Data models produced by the sources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from object_generator.services.circular import CircularStream


@dataclass
class GeneratedObject:
    """
    One synthesized payload, ready for upload.

    Reading `stream` to the end yields exactly `size` bytes. The stream
    shares no writable storage with later objects of the same source.
    """

    name: str
    content_type: str
    size: int
    prefix: str
    stream: CircularStream
