"""High-level generator: providers, samplers and diagnostics wired from config.

``WinRandom`` builds its provider chain from ``WinRandomConfig.providers``
via the registry and exposes the three operations:

    random_long()      -> native-width unsigned integer
    random_bytes(n)    -> n raw bytes
    random_range(max)  -> uniform integer in [0, max)

The module-level functions of the same names use a process-wide default
instance built lazily from the environment.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import TYPE_CHECKING, Any

import winrandom.entropy  # noqa: F401 - registers the built-in providers
from winrandom.config import WinRandomConfig
from winrandom.entropy.registry import EntropyProviderRegistry
from winrandom.entropy.source import EntropySource
from winrandom.exceptions import ConfigValidationError
from winrandom.logging.logger import DrawLogger
from winrandom.logging.types import DrawRecord
from winrandom.sampling.fixed import fetch
from winrandom.sampling.range import RangeSampler

if TYPE_CHECKING:
    from winrandom.sampling.continuous import ContinuousTest

logger = logging.getLogger("winrandom")


def build_entropy_source(config: WinRandomConfig) -> EntropySource:
    """Build the ordered provider chain named by ``config.providers``.

    Args:
        config: Configuration naming the providers in order of preference.

    Returns:
        An EntropySource over the instantiated providers.

    Raises:
        ConfigValidationError: If the list is empty or names an unknown
            provider.
    """
    names = config.provider_names
    if not names:
        raise ConfigValidationError("At least one entropy provider must be configured")
    return EntropySource([EntropyProviderRegistry.create(name, config) for name in names])


class WinRandom:
    """Cryptographically strong random numbers from the OS.

    Args:
        config: Configuration. Loaded from the environment when ``None``.
        source: Provider chain. Built from ``config.providers`` when ``None``.
        continuous_test: Repeated-output detector for range draws. The
            process-wide instance is used when ``None``.
    """

    def __init__(
        self,
        config: WinRandomConfig | None = None,
        source: EntropySource | None = None,
        continuous_test: ContinuousTest | None = None,
    ) -> None:
        self._config = config if config is not None else WinRandomConfig()
        self._source = source if source is not None else build_entropy_source(self._config)
        self._sampler = RangeSampler(
            self._source,
            continuous_test,
            min_test_bits=self._config.continuous_test_min_bits,
            legacy_bit_width=self._config.legacy_bit_width,
        )
        self._draw_logger = DrawLogger(self._config)
        logger.debug("WinRandom initialized with providers %s", self._source.name)

    @property
    def config(self) -> WinRandomConfig:
        return self._config

    @property
    def source(self) -> EntropySource:
        return self._source

    @property
    def draw_logger(self) -> DrawLogger:
        return self._draw_logger

    def random_long(self) -> int:
        """Return a random unsigned integer of ``native_width_bytes`` bytes."""
        start = time.perf_counter()
        width = self._config.native_width_bytes
        draw = fetch(self._source, width, max_count=width)
        self._record("long", draw.provider, len(draw.data), 1, start)
        return draw.to_int()

    def random_bytes(self, n: int) -> bytes:
        """Return *n* random bytes (``0 <= n <= max_byte_count``)."""
        start = time.perf_counter()
        draw = fetch(self._source, n, max_count=self._config.max_byte_count)
        self._record("bytes", draw.provider, len(draw.data), 1, start)
        return draw.data

    def random_range(self, exclusive_max: int) -> int:
        """Return a uniform integer ``n`` with ``0 <= n < exclusive_max``.

        ``random_range(2)`` cycles between 0 and 1.
        """
        start = time.perf_counter()
        draw = self._sampler.draw(exclusive_max)
        self._record(
            "range",
            draw.provider,
            draw.bytes_needed * draw.iterations,
            draw.iterations,
            start,
            exclusive_max=draw.exclusive_max,
        )
        return draw.value

    def health_check(self) -> dict[str, Any]:
        """Return provider chain health plus the active settings."""
        health = self._source.health_check()
        health["native_width_bytes"] = self._config.native_width_bytes
        health["legacy_bit_width"] = self._config.legacy_bit_width
        return health

    def _record(
        self,
        operation: str,
        provider: str,
        nbytes: int,
        iterations: int,
        start: float,
        *,
        exclusive_max: int | None = None,
    ) -> None:
        self._draw_logger.log_draw(
            DrawRecord(
                timestamp_ns=time.time_ns(),
                operation=operation,
                provider=provider,
                bytes_requested=nbytes,
                iterations=iterations,
                elapsed_ms=(time.perf_counter() - start) * 1000.0,
                exclusive_max=exclusive_max,
            )
        )


# ---------------------------------------------------------------------------
# Process-wide default instance
# ---------------------------------------------------------------------------

_default: WinRandom | None = None
_default_lock = threading.Lock()


def default_generator() -> WinRandom:
    """Return the process-wide generator, building it on first use."""
    global _default
    with _default_lock:
        if _default is None:
            _default = WinRandom()
        return _default


def _reset_default() -> None:
    """Drop the process-wide generator. **Test-only** - not part of public API."""
    global _default
    with _default_lock:
        _default = None


def random_long() -> int:
    """Get a cryptographically strong random unsigned long."""
    return default_generator().random_long()


def random_bytes(n: int) -> bytes:
    """Get *n* cryptographically strong random bytes."""
    return default_generator().random_bytes(n)


def random_range(exclusive_max: int) -> int:
    """Get a cryptographically strong random integer N with 0 <= N < max.

    The result is between 0 and ``max - 1`` inclusive: to cycle between 0
    and 1 use ``random_range(2)``.
    """
    return default_generator().random_range(exclusive_max)
