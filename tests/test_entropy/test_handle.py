"""Tests for the EntropyHandle lifecycle."""

from __future__ import annotations

import pytest

from winrandom.entropy.base import EntropyHandle
from winrandom.exceptions import GenerationFailedError


class _FixedHandle(EntropyHandle):
    """Test double: returns a fixed pattern, records releases."""

    def __init__(self, pattern: int = 0xAA, short_by: int = 0) -> None:
        super().__init__("fixed")
        self._pattern = pattern
        self._short_by = short_by
        self.fill_calls = 0
        self.release_calls = 0

    def _fill(self, n: int) -> bytes:
        self.fill_calls += 1
        return bytes([self._pattern] * (n - self._short_by))

    def _release(self) -> None:
        self.release_calls += 1


class TestEntropyHandle:
    def test_fill_returns_requested_length(self) -> None:
        handle = _FixedHandle()
        assert handle.fill(8) == bytes([0xAA] * 8)

    def test_fill_zero_skips_provider(self) -> None:
        handle = _FixedHandle()
        assert handle.fill(0) == b""
        assert handle.fill_calls == 0

    def test_short_read_raises(self) -> None:
        handle = _FixedHandle(short_by=1)
        with pytest.raises(GenerationFailedError, match="returned 3 bytes, expected 4"):
            handle.fill(4)

    def test_release_is_idempotent(self) -> None:
        handle = _FixedHandle()
        handle.release()
        handle.release()
        assert handle.released is True
        assert handle.release_calls == 1

    def test_fill_after_release_raises(self) -> None:
        handle = _FixedHandle()
        handle.release()
        with pytest.raises(GenerationFailedError, match="released"):
            handle.fill(4)

    def test_context_manager_releases(self) -> None:
        handle = _FixedHandle()
        with handle as h:
            assert h is handle
            h.fill(2)
        assert handle.released is True

    def test_context_manager_releases_on_error(self) -> None:
        handle = _FixedHandle()
        with pytest.raises(RuntimeError), handle:
            raise RuntimeError("boom")
        assert handle.release_calls == 1

    def test_provider_name(self) -> None:
        assert _FixedHandle().provider_name == "fixed"
