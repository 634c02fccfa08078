"""Shared pytest fixtures for winrandom tests.

Provides configuration objects, deterministic entropy providers, and
scripted providers whose output and handle lifecycle the tests control.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator

import pytest

from winrandom.config import WinRandomConfig
from winrandom.entropy.base import EntropyHandle, EntropyProvider
from winrandom.entropy.mock import MockProvider
from winrandom.entropy.source import EntropySource
from winrandom.generator import _reset_default
from winrandom.sampling.continuous import CONTINUOUS_TEST, ContinuousTest


class _ScriptedHandle(EntropyHandle):
    def __init__(self, provider: ScriptedProvider) -> None:
        super().__init__(provider.name)
        self._provider = provider

    def _fill(self, n: int) -> bytes:
        self._provider.fill_calls += 1
        return self._provider.next_chunk(n)

    def _release(self) -> None:
        self._provider.release_count += 1


class ScriptedProvider(EntropyProvider):
    """Test double: returns scripted candidate values, counts handles.

    Values are encoded little-endian at whatever width is requested.
    When the script runs out, a counter continues from ``counter_start``
    so consecutive values always differ.
    """

    def __init__(self, values: list[int] | None = None, counter_start: int = 1) -> None:
        self._values = list(values or [])
        self._counter = counter_start
        self.acquire_count = 0
        self.release_count = 0
        self.fill_calls = 0

    @property
    def name(self) -> str:
        return "scripted"

    @property
    def is_available(self) -> bool:
        return True

    def acquire(self) -> EntropyHandle:
        self.acquire_count += 1
        return _ScriptedHandle(self)

    def next_chunk(self, n: int) -> bytes:
        if self._values:
            value = self._values.pop(0)
        else:
            value = self._counter
            self._counter += 1
        return (value % (256**n)).to_bytes(n, "little")


@pytest.fixture(autouse=True)
def _isolate_process_state() -> Iterator[None]:
    """Reset the process-wide generator and continuous test after each test."""
    yield
    _reset_default()
    CONTINUOUS_TEST._reset()


@pytest.fixture
def config() -> WinRandomConfig:
    """Config using the seeded mock provider and no log output."""
    return WinRandomConfig(
        _env_file=None,
        providers="mock",
        mock_seed=42,
        log_level="none",  # type: ignore[call-arg]
    )


@pytest.fixture
def continuous_test() -> ContinuousTest:
    """A fresh continuous test, isolated from the process-wide one."""
    return ContinuousTest()


@pytest.fixture
def mock_provider() -> MockProvider:
    """Seeded mock provider for reproducible draws."""
    return MockProvider(seed=42)


@pytest.fixture
def mock_source(mock_provider: MockProvider) -> EntropySource:
    """Provider chain over the seeded mock provider."""
    return EntropySource([mock_provider])


@pytest.fixture
def scripted() -> Callable[..., tuple[EntropySource, ScriptedProvider]]:
    """Factory: ``scripted([v1, v2, ...])`` -> (source, provider)."""

    def factory(
        values: list[int] | None = None, counter_start: int = 1
    ) -> tuple[EntropySource, ScriptedProvider]:
        provider = ScriptedProvider(values, counter_start)
        return EntropySource([provider]), provider

    return factory
