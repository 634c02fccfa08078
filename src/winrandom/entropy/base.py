"""Abstract base classes for entropy providers and their handles.

A provider knows how to open a session with one OS randomness facility
(CryptoAPI, ``getrandom()``, ``os.urandom()``, a test mock). Opening a
session yields an :class:`EntropyHandle` which fills byte requests until it
is released. Handles are owned by exactly one call and never shared.

Subclasses implement ``name``, ``is_available`` and ``acquire()`` on the
provider, and ``_fill()`` (plus ``_release()`` when there is an OS resource
to free) on the handle.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from winrandom.exceptions import GenerationFailedError

if TYPE_CHECKING:
    from types import TracebackType


class EntropyHandle(ABC):
    """An open session with one entropy provider.

    ``release()`` is idempotent. Once released, ``fill()`` raises
    :class:`~winrandom.exceptions.GenerationFailedError`.

    Args:
        provider_name: Name of the provider that opened this handle.
    """

    def __init__(self, provider_name: str) -> None:
        self._provider_name = provider_name
        self._released = False

    @property
    def provider_name(self) -> str:
        """Name of the provider that opened this handle."""
        return self._provider_name

    @property
    def released(self) -> bool:
        """Whether ``release()`` has been called."""
        return self._released

    def fill(self, n: int) -> bytes:
        """Return exactly *n* random bytes from the provider.

        Args:
            n: Number of random bytes to generate.

        Returns:
            Exactly *n* bytes of entropy.

        Raises:
            GenerationFailedError: If the handle is released, the OS call
                fails, or fewer than *n* bytes were produced.
        """
        if self._released:
            raise GenerationFailedError(
                f"Handle for provider {self._provider_name!r} has been released"
            )
        if n == 0:
            return b""
        data = self._fill(n)
        if len(data) != n:
            raise GenerationFailedError(
                f"Provider {self._provider_name!r} returned {len(data)} bytes, expected {n}"
            )
        return data

    def release(self) -> None:
        """Release the OS-level session (no-op if already released)."""
        if self._released:
            return
        self._released = True
        self._release()

    @abstractmethod
    def _fill(self, n: int) -> bytes:
        """Produce *n* (> 0) bytes from the underlying facility."""

    def _release(self) -> None:  # noqa: B027 - optional hook
        """Free the OS resource behind this handle. Default: nothing to free."""

    def __enter__(self) -> EntropyHandle:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()


class EntropyProvider(ABC):
    """Abstract base for all entropy providers.

    ``acquire()`` must either return a usable handle or raise
    :class:`~winrandom.exceptions.SourceUnavailableError`. Only that error
    makes the provider chain move on to the next provider.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Registered identifier (e.g., ``'rsa_aes'``, ``'urandom'``)."""

    @property
    @abstractmethod
    def is_available(self) -> bool:
        """Whether the facility exists on this platform."""

    @abstractmethod
    def acquire(self) -> EntropyHandle:
        """Open a session with the facility.

        Returns:
            A fresh handle owned by the caller.

        Raises:
            SourceUnavailableError: If the session cannot be opened.
        """

    def health_check(self) -> dict[str, Any]:
        """Return a status dictionary for this provider.

        Returns:
            Dictionary with at least ``'provider'`` and ``'healthy'`` keys.
        """
        return {"provider": self.name, "healthy": self.is_available}
