"""winrandom: cryptographically strong random numbers from the OS RNG.

Three operations, backed by the first available OS provider (CryptoAPI on
Windows, ``getrandom()`` / ``os.urandom()`` elsewhere)::

    import winrandom

    winrandom.long()       # random native-width unsigned integer
    winrandom.bytes(16)    # 16 random bytes
    winrandom.range(6)     # uniform integer in [0, 6)

``long``, ``bytes`` and ``range`` shadow builtins and are therefore not in
``__all__``; ``random_long``, ``random_bytes`` and ``random_range`` are the
same functions under import-safe names.
"""

from __future__ import annotations

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("winrandom")
except PackageNotFoundError:
    __version__ = "0.0.0"

from winrandom.config import WinRandomConfig
from winrandom.exceptions import (
    AllocationFailedError,
    ConfigValidationError,
    EntropyTestFailedError,
    GenerationFailedError,
    InvalidArgumentError,
    SourceUnavailableError,
    WinRandomError,
    WinRandomException,
)
from winrandom.generator import (
    WinRandom,
    default_generator,
    random_bytes,
    random_long,
    random_range,
)

long = random_long
bytes = random_bytes  # noqa: A001
range = random_range  # noqa: A001

__all__ = [
    "AllocationFailedError",
    "ConfigValidationError",
    "EntropyTestFailedError",
    "GenerationFailedError",
    "InvalidArgumentError",
    "SourceUnavailableError",
    "WinRandom",
    "WinRandomConfig",
    "WinRandomError",
    "WinRandomException",
    "__version__",
    "default_generator",
    "random_bytes",
    "random_long",
    "random_range",
]
