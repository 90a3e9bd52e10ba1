"""Text rendering of percentile and histogram results.

The layouts are plain whitespace-aligned columns so the output can be fed
straight into gnuplot.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from latency_stats.models import HistogramResult, PercentileReport

PERCENTILE_ROW_FMT = "%5s %20s %20s %20s"
PERCENTILE_HEADER = ("", "connect", "first byte", "delta")

HISTOGRAM_CELL_FMT = "%10s"
HISTOGRAM_TITLE = "#         "


def format_number(value: int | float) -> str:
    """Render integral values without a decimal part (``50`` not ``50.0``)."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_ms(value: float) -> str:
    return f"{value:0.2f}"


def render_percentiles(report: PercentileReport) -> list[str]:
    lines = [PERCENTILE_ROW_FMT % PERCENTILE_HEADER]
    for row in report.rows:
        lines.append(
            PERCENTILE_ROW_FMT
            % (
                format_number(row.rank),
                format_ms(row.ttc),
                format_ms(row.ttfb),
                format_ms(row.delta),
            )
        )
    return lines


def render_histogram(result: HistogramResult) -> list[str]:
    title = [HISTOGRAM_TITLE] + [HISTOGRAM_CELL_FMT % name for name in result.names]
    lines = [" ".join(title)]
    for ii, start in enumerate(result.bin_starts):
        parts = [HISTOGRAM_CELL_FMT % format_number(start)]
        parts.extend(HISTOGRAM_CELL_FMT % result.column(name)[ii] for name in result.names)
        lines.append(" ".join(parts))
    return lines
