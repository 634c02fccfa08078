"""Name -> provider class table used to build the configured provider chain.

The built-in providers add themselves with ``@register_entropy_provider``
when :mod:`winrandom.entropy` is imported. Packages that ship their own
provider expose it under the ``winrandom.entropy_providers`` entry-point
group; those are imported the first time a name is not found among the
built-ins, and can never replace a built-in name.

Every lookup failure is a configuration error: the only caller-supplied
names come from ``WinRandomConfig.providers``.
"""

from __future__ import annotations

import importlib.metadata
import inspect
import logging
from typing import TYPE_CHECKING, ClassVar

from winrandom.config import WinRandomConfig
from winrandom.exceptions import ConfigValidationError

if TYPE_CHECKING:
    from collections.abc import Callable

    from winrandom.entropy.base import EntropyProvider

logger = logging.getLogger("winrandom")

PLUGIN_GROUP = "winrandom.entropy_providers"


def _takes_config(provider_cls: type) -> bool:
    """Whether *provider_cls* expects a ``WinRandomConfig`` as first argument.

    Matches a first parameter named ``config`` or annotated with
    ``WinRandomConfig`` (as a class or a postponed string annotation).
    """
    try:
        params = list(inspect.signature(provider_cls).parameters.values())
    except (TypeError, ValueError):
        return False
    if not params:
        return False
    first = params[0]
    if first.name == "config":
        return True
    annotation = first.annotation
    return annotation is WinRandomConfig or (
        isinstance(annotation, str) and "WinRandomConfig" in annotation
    )


class EntropyProviderRegistry:
    """Class-level table of provider classes, keyed by configuration name."""

    _providers: ClassVar[dict[str, type[EntropyProvider]]] = {}
    _plugins_scanned: ClassVar[bool] = False

    @classmethod
    def register(cls, name: str) -> Callable[[type[EntropyProvider]], type[EntropyProvider]]:
        """Class decorator adding a provider under *name*.

        Example::

            @register_entropy_provider("rdrand")
            class RdrandProvider(EntropyProvider):
                ...
        """

        def decorator(provider_cls: type[EntropyProvider]) -> type[EntropyProvider]:
            cls._providers[name] = provider_cls
            return provider_cls

        return decorator

    @classmethod
    def lookup(cls, name: str) -> type[EntropyProvider]:
        """Return the provider class configured as *name*.

        Raises:
            ConfigValidationError: If no built-in or plugin provider has
                that name.
        """
        if name not in cls._providers:
            cls._scan_plugins()
        try:
            return cls._providers[name]
        except KeyError:
            raise ConfigValidationError(
                f"Unknown entropy provider {name!r}; "
                f"registered providers: {', '.join(cls.names()) or '(none)'}"
            ) from None

    @classmethod
    def create(cls, name: str, config: WinRandomConfig) -> EntropyProvider:
        """Instantiate provider *name*, passing *config* if it takes one."""
        provider_cls = cls.lookup(name)
        if _takes_config(provider_cls):
            return provider_cls(config)  # type: ignore[call-arg]
        return provider_cls()

    @classmethod
    def names(cls) -> list[str]:
        """Every registered provider name, sorted."""
        cls._scan_plugins()
        return sorted(cls._providers)

    @classmethod
    def available(cls, config: WinRandomConfig | None = None) -> list[str]:
        """Names of the providers usable on this platform, sorted.

        ``rsa_aes`` and ``rsa_full`` only appear on Windows, ``getrandom``
        only where the interpreter exposes ``os.getrandom``.
        """
        config = config if config is not None else WinRandomConfig(_env_file=None)  # type: ignore[call-arg]
        return [name for name in cls.names() if cls.create(name, config).is_available]

    @classmethod
    def _scan_plugins(cls) -> None:
        """Import plugin providers once; a broken plugin is logged and skipped."""
        if cls._plugins_scanned:
            return
        cls._plugins_scanned = True
        try:
            entry_points = importlib.metadata.entry_points(group=PLUGIN_GROUP)
        except Exception:  # metadata of unrelated distributions can be malformed
            logger.warning("Could not read %s entry points", PLUGIN_GROUP, exc_info=True)
            return

        for ep in entry_points:
            if ep.name in cls._providers:
                logger.debug("Plugin provider %r ignored: name is built in", ep.name)
                continue
            try:
                cls._providers[ep.name] = ep.load()
            except Exception:
                logger.warning("Could not load plugin provider %r (%s)", ep.name, ep.value, exc_info=True)
            else:
                logger.debug("Loaded plugin provider %r", ep.name)

    @classmethod
    def _reset(cls) -> None:
        """Forget all providers and rescan plugins next time. **Test-only**."""
        cls._providers.clear()
        cls._plugins_scanned = False


register_entropy_provider = EntropyProviderRegistry.register
