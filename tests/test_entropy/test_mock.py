"""Tests for MockProvider."""

from __future__ import annotations

import numpy as np

from winrandom.config import WinRandomConfig
from winrandom.entropy.mock import MockProvider


def _draw(provider: MockProvider, n: int) -> bytes:
    with provider.acquire() as handle:
        return handle.fill(n)


class TestMockProvider:
    """Tests for the seeded mock provider."""

    def test_name(self) -> None:
        assert MockProvider().name == "mock"

    def test_is_always_available(self) -> None:
        assert MockProvider().is_available is True

    def test_returns_correct_byte_count(self) -> None:
        provider = MockProvider(seed=42)
        for n in (0, 1, 10, 100, 1024):
            assert len(_draw(provider, n)) == n

    def test_seeded_reproducibility(self) -> None:
        """Same seed must produce identical output."""
        assert _draw(MockProvider(seed=123), 100) == _draw(MockProvider(seed=123), 100)

    def test_different_seeds_differ(self) -> None:
        assert _draw(MockProvider(seed=1), 100) != _draw(MockProvider(seed=2), 100)

    def test_seed_from_config(self) -> None:
        config = WinRandomConfig(_env_file=None, mock_seed=7)  # type: ignore[call-arg]
        assert _draw(MockProvider(config), 32) == _draw(MockProvider(seed=7), 32)

    def test_explicit_seed_overrides_config(self) -> None:
        config = WinRandomConfig(_env_file=None, mock_seed=7)  # type: ignore[call-arg]
        assert _draw(MockProvider(config, seed=8), 32) == _draw(MockProvider(seed=8), 32)

    def test_bytes_cover_full_range(self) -> None:
        """Uniform bytes: every value 0..255 appears and the mean is near 127.5."""
        arr = np.frombuffer(_draw(MockProvider(seed=42), 20000), dtype=np.uint8)
        assert len(np.unique(arr)) == 256
        assert abs(arr.mean() - 127.5) < 3.0

    def test_counts_handles(self) -> None:
        provider = MockProvider(seed=42)
        first = provider.acquire()
        second = provider.acquire()
        assert provider.open_handles == 2
        first.release()
        second.release()
        second.release()
        assert provider.acquire_count == 2
        assert provider.release_count == 2
        assert provider.open_handles == 0

    def test_health_check(self) -> None:
        health = MockProvider(seed=3).health_check()
        assert health["provider"] == "mock"
        assert health["healthy"] is True
        assert health["seed"] == 3
        assert health["open_handles"] == 0
