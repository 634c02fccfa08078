"""Tests for fetch, draw_integer and draw_bytes."""

from __future__ import annotations

import sys
from collections.abc import Callable
from typing import Any

import numpy as np
import pytest

from winrandom.entropy.mock import MockProvider
from winrandom.entropy.source import EntropySource
from winrandom.exceptions import (
    AllocationFailedError,
    GenerationFailedError,
    InvalidArgumentError,
)
from winrandom.sampling.fixed import MAX_BYTE_COUNT, draw_bytes, draw_integer, fetch


class _OutOfMemoryMock(MockProvider):
    def _draw(self, n: int) -> bytes:
        raise MemoryError


class _RevokedMock(MockProvider):
    def _draw(self, n: int) -> bytes:
        raise GenerationFailedError("provider revoked")


class TestDrawInteger:
    @pytest.mark.parametrize("width", [1, 2, 4, 8, 16])
    def test_value_fits_width(self, mock_source: EntropySource, width: int) -> None:
        for _ in range(100):
            assert 0 <= draw_integer(mock_source, width) < 2 ** (8 * width)

    def test_uses_full_width(self, mock_source: EntropySource) -> None:
        """Over many draws the top bit of an 8-byte integer is set at least once."""
        assert any(draw_integer(mock_source, 8) >= 2**63 for _ in range(200))

    def test_native_byte_order(self, scripted: Callable[..., Any]) -> None:
        source, _ = scripted([0x01020304])
        raw = (0x01020304).to_bytes(4, "little")
        assert draw_integer(source, 4) == int.from_bytes(raw, sys.byteorder)

    def test_numpy_width(self, mock_source: EntropySource) -> None:
        assert 0 <= draw_integer(mock_source, np.int32(4)) < 2**32  # type: ignore[arg-type]

    @pytest.mark.parametrize("bad", [0, -1, 2.0, True])
    def test_invalid_width(self, mock_source: EntropySource, bad: object) -> None:
        with pytest.raises(InvalidArgumentError):
            draw_integer(mock_source, bad)  # type: ignore[arg-type]

    def test_releases_handle(self, mock_provider: MockProvider, mock_source: EntropySource) -> None:
        draw_integer(mock_source, 8)
        assert (mock_provider.acquire_count, mock_provider.release_count) == (1, 1)


class TestDrawBytes:
    @pytest.mark.parametrize("n", [0, 1, 16, 1024])
    def test_exact_length(self, mock_source: EntropySource, n: int) -> None:
        data = draw_bytes(mock_source, n)
        assert isinstance(data, bytes)
        assert len(data) == n

    def test_zero_is_empty(self, mock_provider: MockProvider, mock_source: EntropySource) -> None:
        assert draw_bytes(mock_source, 0) == b""
        assert mock_provider.open_handles == 0

    @pytest.mark.parametrize("bad", [-1, -1024, 1.5, "8", None, False])
    def test_invalid_count(self, mock_source: EntropySource, bad: object) -> None:
        with pytest.raises(InvalidArgumentError):
            draw_bytes(mock_source, bad)  # type: ignore[arg-type]

    @pytest.mark.parametrize("n", [np.int64(16), np.uint8(16), np.intp(16)])
    def test_numpy_count(self, mock_source: EntropySource, n: object) -> None:
        assert len(draw_bytes(mock_source, n)) == 16  # type: ignore[arg-type]

    def test_fetch_reports_serving_provider(self, mock_source: EntropySource) -> None:
        draw = fetch(mock_source, 8)
        assert len(draw.data) == 8
        assert draw.provider == "mock"
        assert draw.to_int() == int.from_bytes(draw.data, sys.byteorder)

    def test_count_above_maximum(self, mock_source: EntropySource) -> None:
        with pytest.raises(InvalidArgumentError, match=str(MAX_BYTE_COUNT)):
            draw_bytes(mock_source, MAX_BYTE_COUNT + 1)

    def test_custom_maximum(self, mock_source: EntropySource) -> None:
        assert len(draw_bytes(mock_source, 64, max_count=64)) == 64
        with pytest.raises(InvalidArgumentError):
            draw_bytes(mock_source, 65, max_count=64)

    def test_memory_error_becomes_allocation_failed(self) -> None:
        provider = _OutOfMemoryMock(seed=1)
        with pytest.raises(AllocationFailedError, match="16 bytes"):
            draw_bytes(EntropySource([provider]), 16)
        assert provider.open_handles == 0

    def test_allocation_failed_is_memory_error(self) -> None:
        with pytest.raises(MemoryError):
            draw_bytes(EntropySource([_OutOfMemoryMock(seed=1)]), 16)

    def test_generation_failure_propagates(self) -> None:
        provider = _RevokedMock(seed=1)
        with pytest.raises(GenerationFailedError, match="revoked"):
            draw_bytes(EntropySource([provider]), 16)
        assert provider.open_handles == 0

    def test_bytes_are_unmodified(self) -> None:
        expected = MockProvider(seed=9)
        with expected.acquire() as handle:
            raw = handle.fill(32)
        assert draw_bytes(EntropySource([MockProvider(seed=9)]), 32) == raw
