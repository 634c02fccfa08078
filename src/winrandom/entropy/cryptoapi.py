"""Windows CryptoAPI providers backed by ``CryptGenRandom()``.

Two providers are registered, matching the two CryptoAPI provider types
the library has always tried in order:

* ``rsa_aes``: ``PROV_RSA_AES``, the stronger provider, tried first.
* ``rsa_full``: ``PROV_RSA_FULL``, the general-purpose fallback.

Both open an ephemeral context with ``CRYPT_VERIFYCONTEXT`` (no key
container). ``advapi32`` is loaded lazily through ``ctypes``; on other
platforms the providers report themselves unavailable and ``acquire()``
raises :class:`~winrandom.exceptions.SourceUnavailableError`.
"""

from __future__ import annotations

import ctypes
import logging
import sys
from typing import Any

from winrandom.entropy.base import EntropyHandle, EntropyProvider
from winrandom.entropy.registry import register_entropy_provider
from winrandom.exceptions import GenerationFailedError, SourceUnavailableError

logger = logging.getLogger("winrandom")

PROV_RSA_FULL = 1
PROV_RSA_AES = 24
CRYPT_VERIFYCONTEXT = 0xF0000000

# HCRYPTPROV is a ULONG_PTR.
_HCRYPTPROV = ctypes.c_size_t

_advapi32: Any = None


def _last_error() -> int:
    """``GetLastError()`` as captured by ctypes; 0 where ctypes has no such call."""
    get_last_error = getattr(ctypes, "get_last_error", None)
    return get_last_error() if get_last_error is not None else 0


def _load_advapi32() -> Any:
    """Load and prototype ``advapi32.dll`` once.

    Returns:
        The loaded library, or ``None`` when not running on Windows.
    """
    global _advapi32
    if _advapi32 is not None:
        return _advapi32
    win_dll = getattr(ctypes, "WinDLL", None)
    if sys.platform != "win32" or win_dll is None:
        return None

    from ctypes import wintypes

    lib = win_dll("advapi32", use_last_error=True)
    lib.CryptAcquireContextW.argtypes = [
        ctypes.POINTER(_HCRYPTPROV),
        wintypes.LPCWSTR,
        wintypes.LPCWSTR,
        wintypes.DWORD,
        wintypes.DWORD,
    ]
    lib.CryptAcquireContextW.restype = wintypes.BOOL
    lib.CryptGenRandom.argtypes = [_HCRYPTPROV, wintypes.DWORD, ctypes.c_void_p]
    lib.CryptGenRandom.restype = wintypes.BOOL
    lib.CryptReleaseContext.argtypes = [_HCRYPTPROV, wintypes.DWORD]
    lib.CryptReleaseContext.restype = wintypes.BOOL
    _advapi32 = lib
    return lib


class _CryptoApiHandle(EntropyHandle):
    """An acquired ``HCRYPTPROV`` context."""

    def __init__(self, provider_name: str, lib: Any, hprov: int) -> None:
        super().__init__(provider_name)
        self._lib = lib
        self._hprov = hprov

    def _fill(self, n: int) -> bytes:
        buffer = ctypes.create_string_buffer(n)
        if not self._lib.CryptGenRandom(self._hprov, n, buffer):
            error = _last_error()
            raise GenerationFailedError(
                f"Unable to fetch random data from Windows (CryptGenRandom error {error:#x})"
            )
        return buffer.raw

    def _release(self) -> None:
        if not self._lib.CryptReleaseContext(self._hprov, 0):
            logger.warning(
                "CryptReleaseContext failed for provider %r (error %#x)",
                self.provider_name,
                _last_error(),
            )


class _CryptoApiProvider(EntropyProvider):
    """Shared implementation for the CryptoAPI provider types."""

    _provider_type: int
    _name: str

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_available(self) -> bool:
        """Whether ``advapi32`` can be loaded on this platform."""
        return _load_advapi32() is not None

    def acquire(self) -> EntropyHandle:
        """Open an ephemeral CryptoAPI context.

        Raises:
            SourceUnavailableError: If not on Windows or
                ``CryptAcquireContextW`` fails.
        """
        lib = _load_advapi32()
        if lib is None:
            raise SourceUnavailableError(
                f"CryptoAPI provider {self._name!r} requires Windows"
            )
        hprov = _HCRYPTPROV()
        if not lib.CryptAcquireContextW(
            ctypes.byref(hprov), None, None, self._provider_type, CRYPT_VERIFYCONTEXT
        ):
            raise SourceUnavailableError(
                f"Unable to acquire Windows random number generator {self._name!r} "
                f"(error {_last_error():#x})"
            )
        return _CryptoApiHandle(self._name, lib, hprov.value)

    def health_check(self) -> dict[str, Any]:
        return {
            "provider": self._name,
            "healthy": self.is_available,
            "provider_type": self._provider_type,
        }


@register_entropy_provider("rsa_aes")
class RsaAesProvider(_CryptoApiProvider):
    """``PROV_RSA_AES`` CryptoAPI provider (preferred on Windows)."""

    _provider_type = PROV_RSA_AES
    _name = "rsa_aes"


@register_entropy_provider("rsa_full")
class RsaFullProvider(_CryptoApiProvider):
    """``PROV_RSA_FULL`` CryptoAPI provider (fallback on Windows)."""

    _provider_type = PROV_RSA_FULL
    _name = "rsa_full"
