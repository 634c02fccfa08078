"""Ordered provider chain with scoped handle acquisition.

``EntropySource`` holds an ordered list of providers. ``acquire()`` tries
them in turn; when a provider raises
:class:`~winrandom.exceptions.SourceUnavailableError` the next one is
tried. **All other exceptions propagate unchanged**: only unavailability is
a recoverable condition, and only at acquisition time. Once a handle is
open, a failing fill is fatal for the call.

Callers should use :meth:`EntropySource.session`, which guarantees the
handle is released on every exit path.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from winrandom.exceptions import GenerationFailedError, SourceUnavailableError

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from winrandom.entropy.base import EntropyHandle, EntropyProvider

logger = logging.getLogger("winrandom")


class EntropySource:
    """Ordered list of providers, preferred first.

    :attr:`last_provider_used` is a health indicator shared by all callers.
    The provider that served a particular call is the
    :attr:`~winrandom.entropy.base.EntropyHandle.provider_name` of its handle.

    Args:
        providers: Providers to try, in order of preference.

    Raises:
        ValueError: If *providers* is empty.
    """

    def __init__(self, providers: Sequence[EntropyProvider]) -> None:
        if not providers:
            raise ValueError("EntropySource needs at least one provider")
        self._providers = tuple(providers)
        self._last_provider_used: str | None = None
        self._status_lock = threading.Lock()

    @property
    def name(self) -> str:
        """Compound name: ``'<first>+<second>+...'``."""
        return "+".join(p.name for p in self._providers)

    @property
    def providers(self) -> tuple[EntropyProvider, ...]:
        return self._providers

    @property
    def is_available(self) -> bool:
        """Returns ``True`` if any provider is available."""
        return any(p.is_available for p in self._providers)

    @property
    def last_provider_used(self) -> str | None:
        """Name of the provider that served the last ``acquire()``."""
        with self._status_lock:
            return self._last_provider_used

    def acquire(self) -> EntropyHandle:
        """Open a handle on the first provider that can be acquired.

        Returns:
            A fresh handle owned by the caller, who must release it.

        Raises:
            SourceUnavailableError: If every provider is unavailable.
        """
        failures: list[str] = []
        for provider in self._providers:
            try:
                handle = provider.acquire()
            except SourceUnavailableError as e:
                failures.append(f"{provider.name}: {e}")
                logger.warning(
                    "Entropy provider %r unavailable (%s), trying next provider",
                    provider.name,
                    e,
                )
                continue
            if failures:
                logger.info("Using fallback entropy provider %r", provider.name)
            with self._status_lock:
                self._last_provider_used = provider.name
            return handle

        raise SourceUnavailableError(
            "Unable to acquire any entropy provider: " + "; ".join(failures)
        )

    def fill(self, handle: EntropyHandle, bytes_needed: int) -> bytes:
        """Request exactly *bytes_needed* random bytes through *handle*.

        Args:
            handle: A handle returned by :meth:`acquire`.
            bytes_needed: Number of bytes to request.

        Returns:
            Exactly *bytes_needed* bytes.

        Raises:
            GenerationFailedError: If the OS facility fails the request.
        """
        try:
            return handle.fill(bytes_needed)
        except OSError as e:
            raise GenerationFailedError(
                f"Unable to fetch random data from {handle.provider_name!r}: {e}"
            ) from e

    def release(self, handle: EntropyHandle) -> None:
        """Release *handle* (no-op if already released)."""
        handle.release()

    @contextmanager
    def session(self) -> Iterator[EntropyHandle]:
        """Acquire a handle for the duration of a ``with`` block.

        The handle is released on normal exit and when the block raises.
        """
        handle = self.acquire()
        try:
            yield handle
        finally:
            self.release(handle)

    def health_check(self) -> dict[str, Any]:
        """Return health status for every provider in the chain.

        Returns:
            Dictionary with overall health and per-provider status.
        """
        return {
            "source": self.name,
            "healthy": self.is_available,
            "providers": [p.health_check() for p in self._providers],
            "last_provider_used": self.last_provider_used,
        }
