"""Entropy provider subsystem for winrandom.

Re-exports the ABCs, registry, provider chain and all built-in providers
for convenient access::

    from winrandom.entropy import EntropySource, EntropyProviderRegistry
    from winrandom.entropy import UrandomProvider, MockProvider
"""

from winrandom.entropy.base import EntropyHandle, EntropyProvider
from winrandom.entropy.cryptoapi import RsaAesProvider, RsaFullProvider
from winrandom.entropy.mock import MockProvider
from winrandom.entropy.registry import EntropyProviderRegistry, register_entropy_provider
from winrandom.entropy.source import EntropySource
from winrandom.entropy.system import GetrandomProvider, UrandomProvider

__all__ = [
    "EntropyHandle",
    "EntropyProvider",
    "EntropyProviderRegistry",
    "EntropySource",
    "GetrandomProvider",
    "MockProvider",
    "RsaAesProvider",
    "RsaFullProvider",
    "UrandomProvider",
    "register_entropy_provider",
]
