"""FIPS 140-2 continuous random number generator test.

Every candidate drawn by the range sampler is compared with the previous
candidate, across calls and threads. A bit-identical repeat at a width of
``min_bits`` or more is treated as a catastrophic failure of the entropy
source. Narrower candidates are recorded but not checked, because small
values legitimately repeat.

The state is process-wide: :data:`CONTINUOUS_TEST` is created at import
time and never reset. Access is serialized with a lock so that the
compare and the update happen as one step.
"""

from __future__ import annotations

import logging
import threading

from winrandom.exceptions import EntropyTestFailedError

logger = logging.getLogger("winrandom")

DEFAULT_MIN_BITS = 16


class ContinuousTest:
    """Lock-guarded cell holding the last range candidate.

    The cell starts empty, so the first candidate after process start is
    never reported as a repeat.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._last: int | None = None

    @property
    def last_value(self) -> int | None:
        """The most recent candidate, or ``None`` before the first draw."""
        with self._lock:
            return self._last

    def check_and_update(
        self,
        candidate: int,
        bits: int,
        min_bits: int = DEFAULT_MIN_BITS,
    ) -> None:
        """Record *candidate* and fail if it repeats the previous one.

        The candidate is recorded whether or not the check trips.

        Args:
            candidate: Raw candidate value, before range rejection.
            bits: Width in bits the candidate was drawn at.
            min_bits: Narrowest width at which a repeat is an error.

        Raises:
            EntropyTestFailedError: If ``bits >= min_bits`` and *candidate*
                equals the previous candidate.
        """
        with self._lock:
            previous = self._last
            self._last = candidate
        if bits >= min_bits and previous is not None and candidate == previous:
            logger.error(
                "Continuous random number generator test failed: "
                "repeated %d-bit candidate",
                bits,
            )
            raise EntropyTestFailedError("Continuous random number generator test failed")

    def _reset(self) -> None:
        """Forget the last candidate. **Test-only** - not part of public API."""
        with self._lock:
            self._last = None


CONTINUOUS_TEST = ContinuousTest()
