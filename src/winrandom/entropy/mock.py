"""Seeded mock entropy provider for testing and simulation.

Generates uniform bytes from a numpy ``Generator``, allowing deterministic
tests (via seed). Counts acquired and released handles so tests can verify
that every call releases what it acquired. Never use it for real secrets.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import numpy as np

from winrandom.entropy.base import EntropyHandle, EntropyProvider
from winrandom.entropy.registry import register_entropy_provider

if TYPE_CHECKING:
    from winrandom.config import WinRandomConfig


class _MockHandle(EntropyHandle):
    def __init__(self, provider: MockProvider) -> None:
        super().__init__(provider.name)
        self._provider = provider

    def _fill(self, n: int) -> bytes:
        return self._provider._draw(n)

    def _release(self) -> None:
        self._provider.release_count += 1


@register_entropy_provider("mock")
class MockProvider(EntropyProvider):
    """Deterministic uniform byte provider.

    Args:
        config: Optional configuration; ``mock_seed`` is used when *seed*
            is not given.
        seed: Optional RNG seed for reproducible output.
    """

    def __init__(self, config: WinRandomConfig | None = None, *, seed: int | None = None) -> None:
        if seed is None and config is not None:
            seed = config.mock_seed
        self._seed = seed
        self._rng = np.random.default_rng(seed)
        self.acquire_count = 0
        self.release_count = 0

    @property
    def name(self) -> str:
        """Return ``'mock'``."""
        return "mock"

    @property
    def is_available(self) -> bool:
        """Always returns ``True``."""
        return True

    @property
    def open_handles(self) -> int:
        """Handles acquired but not yet released."""
        return self.acquire_count - self.release_count

    def acquire(self) -> EntropyHandle:
        self.acquire_count += 1
        return _MockHandle(self)

    def _draw(self, n: int) -> bytes:
        return self._rng.integers(0, 256, size=n, dtype=np.uint8).tobytes()

    def health_check(self) -> dict[str, Any]:
        return {
            "provider": self.name,
            "healthy": True,
            "seed": self._seed,
            "open_handles": self.open_handles,
        }
