"""Line parser for TTC/TTFB measurement streams.

Each non-blank line carries two whitespace-separated integers: the
time-to-connect and time-to-first-byte of one request, in nanoseconds.

Two unit modes are supported and deliberately kept apart:

- ``Units.NANOSECONDS`` keeps raw integers; percentiles are computed on them
  and converted with :func:`ns_to_ms` (true division) only when rendered.
- ``Units.MILLISECONDS`` truncates each value with :func:`to_ms` as it is
  read, and the delta is taken between the truncated values.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import TYPE_CHECKING

from latency_stats.errors import MalformedLineError
from latency_stats.models import LatencyData, Measurement

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from pathlib import Path

logger = logging.getLogger("latency_stats.parser")

NANOS_PER_MILLI = 1_000_000


class Units(StrEnum):
    NANOSECONDS = "ns"
    MILLISECONDS = "ms"


def to_ms(nanos: int) -> int:
    """Truncating nanosecond to millisecond conversion (floor division)."""
    return nanos // NANOS_PER_MILLI


def ns_to_ms(nanos: int | float) -> float:
    """Non-truncating nanosecond to millisecond conversion."""
    return nanos / NANOS_PER_MILLI


def parse_line(line: str, line_number: int = 1, source: str | None = None) -> Measurement:
    tokens = line.split()
    # int() also accepts non-ASCII Unicode digits
    if len(tokens) != 2 or not all(token.isascii() for token in tokens):
        raise MalformedLineError(line_number, line.rstrip("\n"), source)
    try:
        ttc, ttfb = (int(token) for token in tokens)
    except ValueError:
        raise MalformedLineError(line_number, line.rstrip("\n"), source) from None
    return Measurement(ttc=ttc, ttfb=ttfb)


def iter_measurements(lines: Iterable[str], source: str | None = None) -> Iterator[Measurement]:
    """Yield one measurement per non-blank line, in input order."""
    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        yield parse_line(line, line_number, source)


def read_data(
    lines: Iterable[str],
    units: Units = Units.MILLISECONDS,
    source: str | None = None,
) -> LatencyData:
    """Accumulate the ttc, ttfb and delta series from a stream of lines.

    Any malformed line aborts the read with :class:`MalformedLineError`;
    nothing is skipped.
    """
    data = LatencyData()
    for m in iter_measurements(lines, source):
        if units is Units.MILLISECONDS:
            ttc, ttfb = to_ms(m.ttc), to_ms(m.ttfb)
        else:
            ttc, ttfb = m.ttc, m.ttfb
        data.ttcs.append(ttc)
        data.ttfbs.append(ttfb)
        data.deltas.append(ttfb - ttc)

    logger.debug("Read %d measurements from %s", len(data), source or "stream")
    return data


def read_source(path: Path, units: Units = Units.MILLISECONDS) -> LatencyData:
    """Read one measurement file completely, closing it before returning."""
    with path.open("r") as f:
        return read_data(f, units=units, source=str(path))
