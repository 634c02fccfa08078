"""Fixed-width integer and raw byte-buffer fetches.

Thin pass-throughs: one handle, one fill, release, return. No range
restriction and no continuous test; the bytes are returned as produced.
"""

from __future__ import annotations

import operator
from typing import TYPE_CHECKING

from winrandom.exceptions import AllocationFailedError, InvalidArgumentError
from winrandom.sampling.types import FixedDraw

if TYPE_CHECKING:
    from winrandom.entropy.source import EntropySource

MAX_BYTE_COUNT = 0xFFFFFFFF


def as_count(
    value: object, what: str, *, minimum: int | None = None, maximum: int | None = None
) -> int:
    """Coerce *value* to a plain ``int`` within bounds.

    Anything implementing ``__index__`` (``numpy.int64`` and friends) is
    accepted; ``bool`` is not, even though it is an ``int`` subclass.

    Raises:
        InvalidArgumentError: If *value* is not integer-like or out of bounds.
    """
    if isinstance(value, bool):
        raise InvalidArgumentError(f"{what} must be an integer, got bool")
    try:
        count = operator.index(value)  # type: ignore[arg-type]
    except TypeError:
        raise InvalidArgumentError(
            f"{what} must be an integer, got {type(value).__name__}"
        ) from None
    if minimum is not None and count < minimum:
        raise InvalidArgumentError(f"{what} must be >= {minimum}, got {count}")
    if maximum is not None and count > maximum:
        raise InvalidArgumentError(f"{what} must be <= {maximum}, got {count}")
    return count


def fetch(source: EntropySource, n: int, *, max_count: int = MAX_BYTE_COUNT) -> FixedDraw:
    """Fill *n* bytes through one handle and report which provider served them.

    Args:
        source: Provider chain to draw from.
        n: Number of bytes, ``0 <= n <= max_count``. Zero yields ``b""``.
        max_count: Largest accepted byte count.

    Raises:
        InvalidArgumentError: If *n* is not an integer in range.
        AllocationFailedError: If the buffer cannot be allocated.
        SourceUnavailableError: If no provider can be acquired.
        GenerationFailedError: If the fill request fails.
    """
    n = as_count(n, "byte count", minimum=0, maximum=max_count)
    try:
        with source.session() as handle:
            return FixedDraw(source.fill(handle, n), handle.provider_name)
    except AllocationFailedError:
        raise
    except MemoryError as e:
        raise AllocationFailedError(f"Unable to allocate a buffer of {n} bytes") from e


def draw_integer(source: EntropySource, width_bytes: int) -> int:
    """Return a full-width unsigned integer of *width_bytes* random bytes.

    The bytes are read in native byte order, so the result has the same
    bit pattern an ``unsigned long`` filled in place would have.

    Args:
        source: Provider chain to draw from.
        width_bytes: Integer width in bytes (e.g. 8 for a 64-bit long).

    Returns:
        Integer in ``[0, 2 ** (8 * width_bytes))``.

    Raises:
        InvalidArgumentError: If *width_bytes* is not a positive integer.
        SourceUnavailableError: If no provider can be acquired.
        GenerationFailedError: If the fill request fails.
    """
    width_bytes = as_count(width_bytes, "width_bytes", minimum=1)
    return fetch(source, width_bytes, max_count=width_bytes).to_int()


def draw_bytes(source: EntropySource, n: int, *, max_count: int = MAX_BYTE_COUNT) -> bytes:
    """Return *n* raw random bytes, unmodified.

    See :func:`fetch` for the accepted counts and the errors raised.
    """
    return fetch(source, n, max_count=max_count).data
