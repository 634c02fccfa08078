"""Data types for the diagnostic logging subsystem."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DrawRecord:
    """Immutable record of one completed draw.

    Attributes:
        timestamp_ns: Wall-clock time of the draw (nanoseconds since epoch).
        operation: ``'long'``, ``'bytes'`` or ``'range'``.
        provider: Name of the provider that served the handle.
        bytes_requested: Total bytes fetched from the provider.
        iterations: Fill requests made (candidates, for range draws).
        elapsed_ms: Time for the whole operation (milliseconds).
        exclusive_max: Upper bound of a range draw, ``None`` otherwise.
    """

    timestamp_ns: int
    operation: str
    provider: str
    bytes_requested: int
    iterations: int
    elapsed_ms: float
    exclusive_max: int | None = None
