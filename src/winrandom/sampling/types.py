"""Data types for the sampling subsystem."""

from __future__ import annotations

import sys
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RangeDraw:
    """Result of one rejection-sampled range draw.

    Attributes:
        value: Accepted integer, ``0 <= value < exclusive_max``.
        exclusive_max: Upper bound requested by the caller.
        bits_needed: Candidate width in bits.
        bytes_needed: Bytes fetched per candidate.
        iterations: Candidates drawn, including the accepted one.
        provider: Name of the provider that served the handle.
    """

    value: int
    exclusive_max: int
    bits_needed: int
    bytes_needed: int
    iterations: int
    provider: str


@dataclass(frozen=True, slots=True)
class FixedDraw:
    """Bytes from a single fill, tagged with the provider that served it.

    Attributes:
        data: The bytes, unmodified.
        provider: Name of the provider whose handle produced *data*.
    """

    data: bytes
    provider: str

    def to_int(self) -> int:
        """*data* as an unsigned integer in native byte order."""
        return int.from_bytes(self.data, sys.byteorder)
