"""Unbiased integer in ``[0, max)`` by rejection sampling.

Implements NIST SP800-90A B.5.1.2, the Complex Discard Method, at byte
granularity: candidates are drawn a whole number of bytes at a time and
discarded until one falls below ``max``. Every accepted value is equally
likely because every candidate in the sample space is.

Candidates are whole bytes, so when ``max`` sits just above a byte
boundary (``257``, ``65537``) most candidates are discarded.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from winrandom.exceptions import InvalidArgumentError
from winrandom.sampling.continuous import CONTINUOUS_TEST, DEFAULT_MIN_BITS
from winrandom.sampling.fixed import as_count
from winrandom.sampling.types import RangeDraw

if TYPE_CHECKING:
    from winrandom.entropy.source import EntropySource
    from winrandom.sampling.continuous import ContinuousTest

logger = logging.getLogger("winrandom")


def _ceil_log2(value: int) -> int:
    """Exact ``ceil(log2(value))`` for ``value >= 1``."""
    return (value - 1).bit_length()


def bits_for_range(exclusive_max: int, *, legacy: bool = False) -> int:
    """Number of candidate bits used to sample ``[0, exclusive_max)``.

    By default this is the bit length of ``exclusive_max - 1``, the largest
    value that must be producible. With *legacy* it is
    ``ceil(log2(exclusive_max - 1))``, which is one bit short whenever
    ``exclusive_max - 1`` is a power of two (see DESIGN.md).

    Args:
        exclusive_max: Upper bound, already validated to be > 1.
        legacy: Use the historical ``ceil(log2(max - 1))`` formula.

    Returns:
        Candidate width in bits.
    """
    if legacy:
        return _ceil_log2(exclusive_max - 1)
    return (exclusive_max - 1).bit_length()


def bytes_for_bits(bits: int) -> int:
    """Whole bytes needed to hold *bits* bits."""
    return (bits + 7) // 8


def validate_range(exclusive_max: object) -> int:
    """Check the precondition ``exclusive_max > 1``.

    Raises:
        InvalidArgumentError: If *exclusive_max* is not an integer or is
            ``<= 1``.
    """
    exclusive_max = as_count(exclusive_max, "range max")
    if exclusive_max <= 1:
        raise InvalidArgumentError(
            f"range max must be > 1, got {exclusive_max}; "
            "the result satisfies 0 <= n < max, so range(2) is the smallest useful call"
        )
    return exclusive_max


class RangeSampler:
    """Rejection sampler over an :class:`~winrandom.entropy.source.EntropySource`.

    One handle is held for the whole call and released on the single exit
    path. Each candidate passes through the continuous test before the range
    check, so a stuck source is reported even if its output would have been
    rejected.

    Args:
        source: Provider chain to draw candidates from.
        continuous_test: Repeated-output detector. Defaults to the
            process-wide :data:`~winrandom.sampling.continuous.CONTINUOUS_TEST`.
        min_test_bits: Narrowest candidate width the continuous test checks.
        legacy_bit_width: Size candidates with ``ceil(log2(max - 1))``.
    """

    def __init__(
        self,
        source: EntropySource,
        continuous_test: ContinuousTest | None = None,
        *,
        min_test_bits: int = DEFAULT_MIN_BITS,
        legacy_bit_width: bool = False,
    ) -> None:
        self._source = source
        self._continuous_test = continuous_test if continuous_test is not None else CONTINUOUS_TEST
        self._min_test_bits = min_test_bits
        self._legacy_bit_width = legacy_bit_width

    @property
    def continuous_test(self) -> ContinuousTest:
        return self._continuous_test

    def draw(self, exclusive_max: int) -> RangeDraw:
        """Draw a uniform integer in ``[0, exclusive_max)`` with diagnostics.

        Args:
            exclusive_max: Upper bound, exclusive. Must be > 1.

        Returns:
            RangeDraw with the accepted value and loop statistics.

        Raises:
            InvalidArgumentError: If *exclusive_max* <= 1 or not an integer.
            SourceUnavailableError: If no provider can be acquired.
            GenerationFailedError: If a fill request fails.
            EntropyTestFailedError: If the continuous test trips.
        """
        exclusive_max = validate_range(exclusive_max)
        bits = bits_for_range(exclusive_max, legacy=self._legacy_bit_width)
        nbytes = bytes_for_bits(bits)

        iterations = 0
        with self._source.session() as handle:
            while True:
                iterations += 1
                raw = self._source.fill(handle, nbytes)
                candidate = int.from_bytes(raw, "little")
                self._continuous_test.check_and_update(candidate, bits, self._min_test_bits)
                if candidate < exclusive_max:
                    break

        if iterations > 1:
            logger.debug(
                "range(%d): accepted after %d candidates (%d bytes each)",
                exclusive_max,
                iterations,
                nbytes,
            )
        return RangeDraw(
            value=candidate,
            exclusive_max=exclusive_max,
            bits_needed=bits,
            bytes_needed=nbytes,
            iterations=iterations,
            provider=handle.provider_name,
        )

    def sample(self, exclusive_max: int) -> int:
        """Return a uniform integer ``c`` with ``0 <= c < exclusive_max``."""
        return self.draw(exclusive_max).value
