"""Exception hierarchy for winrandom.

All exceptions derive from WinRandomError, enabling broad catch patterns
at the application boundary while allowing fine-grained handling internally.
``WinRandomException`` is kept as an alias of the base class, the name the
C extension registered.
"""


class WinRandomError(Exception):
    """Base exception for all winrandom errors."""


WinRandomException = WinRandomError


class InvalidArgumentError(WinRandomError, ValueError):
    """A caller-supplied parameter violates a precondition.

    Raised for ``range(max)`` with ``max <= 1``, for negative or oversized
    byte counts, and for arguments of the wrong type.
    """


class SourceUnavailableError(WinRandomError):
    """No entropy provider could be acquired.

    Raised by a single provider when it cannot open a session, and by the
    provider chain when every configured provider failed.
    """


class GenerationFailedError(WinRandomError):
    """The OS facility refused or failed a fill request.

    Raised after a handle was successfully acquired, e.g. when the provider
    was revoked, the handle was already released, or a short read occurred.
    """


class EntropyTestFailedError(WinRandomError):
    """The continuous random number generator test tripped.

    Two consecutive range candidates were bit-identical at a width where a
    repeat is not plausible. This indicates a probable catastrophic failure
    of the entropy source and is never retried.
    """


class AllocationFailedError(WinRandomError, MemoryError):
    """A buffer for a bytes request could not be obtained."""


class ConfigValidationError(WinRandomError):
    """Configuration validation failed.

    Raised when the configured provider list is empty or names a provider
    that is not registered.
    """
