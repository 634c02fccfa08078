"""Diagnostic logger for draw events.

Uses the standard ``logging`` module with the ``"winrandom"`` logger.
Supports three verbosity levels and an in-memory diagnostic mode for
post-hoc analysis of rejection rates. Drawn values are never logged.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from winrandom.config import WinRandomConfig
    from winrandom.logging.types import DrawRecord

logger = logging.getLogger("winrandom")


class DrawLogger:
    """Per-draw diagnostic logger.

    Log levels:
        ``"none"``: No logging output. Records are still stored if
        ``diagnostic_mode=True``.

        ``"summary"``: One DEBUG line per draw (operation, provider,
        bytes, iterations, timing).

        ``"full"``: Full JSON dump of all record fields at DEBUG.
    """

    def __init__(self, config: WinRandomConfig) -> None:
        self._log_level = config.log_level
        self._diagnostic_mode = config.diagnostic_mode
        self._records: list[DrawRecord] = []

    def log_draw(self, record: DrawRecord) -> None:
        """Log a single draw event.

        Args:
            record: Immutable record of the completed draw.
        """
        if self._diagnostic_mode:
            self._records.append(record)

        if self._log_level == "none":
            return

        if self._log_level == "summary":
            logger.debug(
                "op=%s provider=%s bytes=%d iterations=%d%s total=%.3fms",
                record.operation,
                record.provider,
                record.bytes_requested,
                record.iterations,
                f" max={record.exclusive_max}" if record.exclusive_max is not None else "",
                record.elapsed_ms,
            )
        elif self._log_level == "full":
            logger.debug("draw_record: %s", json.dumps(asdict(record), default=str))

    def get_diagnostic_data(self) -> list[DrawRecord]:
        """Return all stored records (requires ``diagnostic_mode=True``)."""
        return list(self._records)

    def get_summary_stats(self) -> dict[str, Any]:
        """Compute summary statistics over all stored records.

        Returns:
            Dictionary with aggregate stats, or empty dict if no records.
            ``range_rejection_rate`` is the fraction of range candidates
            that were discarded.
        """
        if not self._records:
            return {}

        n = len(self._records)
        counts: dict[str, int] = {}
        for r in self._records:
            counts[r.operation] = counts.get(r.operation, 0) + 1
        elapsed = [r.elapsed_ms for r in self._records]

        stats: dict[str, Any] = {
            "total_draws": n,
            "draws_by_operation": counts,
            "total_bytes": sum(r.bytes_requested for r in self._records),
            "mean_elapsed_ms": sum(elapsed) / n,
            "max_elapsed_ms": max(elapsed),
        }

        range_iterations = [r.iterations for r in self._records if r.operation == "range"]
        if range_iterations:
            candidates = sum(range_iterations)
            stats["mean_range_iterations"] = candidates / len(range_iterations)
            stats["range_rejection_rate"] = (candidates - len(range_iterations)) / candidates
        return stats
