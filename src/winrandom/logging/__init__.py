"""Diagnostic logging subsystem for winrandom.

Provides immutable per-draw records and a configurable logger that
supports none/summary/full verbosity and in-memory diagnostic mode.
"""

from winrandom.logging.logger import DrawLogger
from winrandom.logging.types import DrawRecord

__all__ = [
    "DrawLogger",
    "DrawRecord",
]
