"""Sampling subsystem: range rejection sampling and fixed-width fetches."""

from winrandom.sampling.continuous import CONTINUOUS_TEST, ContinuousTest
from winrandom.sampling.fixed import draw_bytes, draw_integer, fetch
from winrandom.sampling.range import RangeSampler, bits_for_range, bytes_for_bits
from winrandom.sampling.types import FixedDraw, RangeDraw

__all__ = [
    "CONTINUOUS_TEST",
    "ContinuousTest",
    "FixedDraw",
    "RangeDraw",
    "RangeSampler",
    "bits_for_range",
    "bytes_for_bits",
    "draw_bytes",
    "draw_integer",
    "fetch",
]
