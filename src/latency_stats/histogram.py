"""Fixed-width histograms of one series across several named sources.

All sources are binned against a single edge set, so counts line up
column by column. Bins are half-open ``[edge_i, edge_i+1)``: a value equal to an
edge belongs to the bin that starts at that edge. Values outside ``[edges[0], edges[-1])``
are dropped and tallied separately.
"""

from __future__ import annotations

import bisect
import logging
from typing import TYPE_CHECKING

from latency_stats.errors import UsageError
from latency_stats.models import HistogramResult, LatencyData, NamedSource, SeriesKind
from latency_stats.parser import Units, read_source

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from latency_stats.config import ReportSettings

logger = logging.getLogger("latency_stats.histogram")


def bin_edges(nbins: int, bin_size: float) -> list[float]:
    """``nbins + 1`` edges at ``bin_size * i`` for ``i`` in ``0..nbins``."""
    if nbins < 1:
        raise ValueError(f"Bin count must be at least 1, got {nbins}")
    if bin_size <= 0:
        raise ValueError(f"Bin size must be positive, got {bin_size}")
    return [bin_size * i for i in range(nbins + 1)]


def bin_index(edges: Sequence[float], value: int | float) -> int | None:
    """Index of the bin holding ``value``, or None when it falls outside the edges."""
    if value < edges[0] or value >= edges[-1]:
        return None
    return bisect.bisect_right(edges, value) - 1


def bin_counts(values: Sequence[int | float], edges: Sequence[float]) -> tuple[list[int], int]:
    """Count values per bin; returns (counts, dropped)."""
    counts = [0] * (len(edges) - 1)
    dropped = 0
    for value in values:
        idx = bin_index(edges, value)
        if idx is None:
            dropped += 1
        else:
            counts[idx] += 1
    return counts, dropped


def build_histogram(
    series: Mapping[str, Sequence[int | float]],
    kind: SeriesKind,
    settings: ReportSettings,
) -> HistogramResult:
    """Bin each named series against one shared edge set.

    Column order is the lexicographic order of the names, whatever order the
    mapping was built in.
    """
    edges = bin_edges(settings.nbins, settings.bin_size)
    names = sorted(series)

    counts: dict[str, list[int]] = {}
    dropped: dict[str, int] = {}
    for name in names:
        counts[name], dropped[name] = bin_counts(series[name], edges)
        if dropped[name]:
            logger.info(
                "%s: %d of %d %s values outside [%s, %s)",
                name,
                dropped[name],
                len(series[name]),
                kind.value,
                edges[0],
                edges[-1],
            )

    return HistogramResult(kind=kind, edges=edges, names=names, counts=counts, dropped=dropped)


def load_sources(sources: Sequence[NamedSource]) -> dict[str, LatencyData]:
    """Read every source in millisecond mode, one file at a time."""
    loaded: dict[str, LatencyData] = {}
    for source in sources:
        if source.name in loaded:
            raise UsageError(f"Duplicate source name '{source.name}'")
        loaded[source.name] = read_source(source.path, units=Units.MILLISECONDS)
    return loaded


def histogram_report(
    sources: Sequence[NamedSource],
    kind: SeriesKind,
    settings: ReportSettings,
) -> HistogramResult:
    """Read the sources and bin the selected series of each."""
    loaded = load_sources(sources)
    return build_histogram(
        {name: data.series(kind) for name, data in loaded.items()}, kind, settings
    )
