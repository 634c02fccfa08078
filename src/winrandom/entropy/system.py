"""POSIX-style system providers: ``getrandom()`` and ``os.urandom()``.

``urandom`` is available on every platform Python supports and is the
last resort of the default provider order. ``getrandom`` exists on Linux
only and reads the kernel CSPRNG without going through a file descriptor.
Neither facility has a per-session OS resource, so their handles have
nothing to free on release.
"""

from __future__ import annotations

import os

from winrandom.entropy.base import EntropyHandle, EntropyProvider
from winrandom.entropy.registry import register_entropy_provider
from winrandom.exceptions import GenerationFailedError, SourceUnavailableError


class _UrandomHandle(EntropyHandle):
    def _fill(self, n: int) -> bytes:
        try:
            return os.urandom(n)
        except (OSError, NotImplementedError) as e:
            raise GenerationFailedError(f"os.urandom() failed: {e}") from e


class _GetrandomHandle(EntropyHandle):
    def _fill(self, n: int) -> bytes:
        # getrandom() may return fewer bytes than asked for very large requests.
        chunks: list[bytes] = []
        remaining = n
        try:
            while remaining:
                chunk = os.getrandom(remaining)
                if not chunk:
                    break
                chunks.append(chunk)
                remaining -= len(chunk)
        except OSError as e:
            raise GenerationFailedError(f"getrandom() failed: {e}") from e
        return b"".join(chunks)


@register_entropy_provider("urandom")
class UrandomProvider(EntropyProvider):
    """``os.urandom()`` wrapper, available on all platforms."""

    @property
    def name(self) -> str:
        """Return ``'urandom'``."""
        return "urandom"

    @property
    def is_available(self) -> bool:
        """Always returns ``True``."""
        return True

    def acquire(self) -> EntropyHandle:
        """Return a handle; there is no OS session to open."""
        return _UrandomHandle(self.name)


@register_entropy_provider("getrandom")
class GetrandomProvider(EntropyProvider):
    """``os.getrandom()`` wrapper (Linux 3.17+)."""

    @property
    def name(self) -> str:
        """Return ``'getrandom'``."""
        return "getrandom"

    @property
    def is_available(self) -> bool:
        """Whether this interpreter exposes ``os.getrandom``."""
        return hasattr(os, "getrandom")

    def acquire(self) -> EntropyHandle:
        """Return a handle if ``getrandom()`` exists on this platform.

        Raises:
            SourceUnavailableError: If ``os.getrandom`` is missing or the
                kernel rejects the syscall.
        """
        if not self.is_available:
            raise SourceUnavailableError("getrandom() is not available on this platform")
        try:
            os.getrandom(0)
        except OSError as e:
            raise SourceUnavailableError(f"getrandom() test call failed: {e}") from e
        return _GetrandomHandle(self.name)
