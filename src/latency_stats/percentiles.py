"""Percentile report over the ttc, ttfb and delta series.

Percentiles use linear interpolation between adjacent order statistics:
the rank ``p`` maps to position ``p / 100 * (n - 1)`` in the sorted
sequence, and a fractional position blends the two neighbouring values.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from latency_stats.errors import EmptyInputError
from latency_stats.models import LatencyData, PercentileReport, PercentileRow, SeriesKind
from latency_stats.parser import ns_to_ms

if TYPE_CHECKING:
    from collections.abc import Sequence

    from latency_stats.config import ReportSettings

logger = logging.getLogger("latency_stats.percentiles")


def percentile(sorted_values: Sequence[int | float], rank: float) -> float:
    """Interpolated value at ``rank`` (0-100) of an ascending sequence."""
    if not sorted_values:
        raise EmptyInputError()
    if not 0 <= rank <= 100:
        raise ValueError(f"Percentile rank {rank} is outside [0, 100]")

    position = rank / 100 * (len(sorted_values) - 1)
    lower = math.floor(position)
    upper = math.ceil(position)
    low_value = sorted_values[lower]
    if lower == upper:
        return low_value
    fraction = position - lower
    return low_value + fraction * (sorted_values[upper] - low_value)


def percentile_report(data: LatencyData, settings: ReportSettings) -> PercentileReport:
    """Compute every configured rank for the three series.

    ``data`` is expected in nanoseconds; values are converted to milliseconds
    after interpolation.
    """
    if len(data) == 0:
        raise EmptyInputError("measurement stream")

    ordered = {kind: sorted(data.series(kind)) for kind in SeriesKind}
    rows = [
        PercentileRow(
            rank=rank,
            ttc=ns_to_ms(percentile(ordered[SeriesKind.TTC], rank)),
            ttfb=ns_to_ms(percentile(ordered[SeriesKind.TTFB], rank)),
            delta=ns_to_ms(percentile(ordered[SeriesKind.DELTA], rank)),
        )
        for rank in settings.ranks
    ]
    logger.debug("Computed %d percentile ranks over %d measurements", len(rows), len(data))
    return PercentileReport(count=len(data), rows=rows)
