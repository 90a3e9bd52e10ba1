"""Error types raised by the parsing and reporting pipelines."""

from __future__ import annotations


class LatencyStatsError(Exception):
    """Base class for all latency-stats errors."""


class MalformedLineError(LatencyStatsError, ValueError):
    def __init__(self, line_number: int, line: str, source: str | None = None) -> None:
        self.line_number = line_number
        self.line = line
        self.source = source
        where = f"{source}:{line_number}" if source else f"line {line_number}"
        super().__init__(
            f"Malformed measurement at {where}: {line!r} "
            "(expected two whitespace-separated integers)"
        )


class EmptyInputError(LatencyStatsError, ValueError):
    def __init__(self, what: str = "sequence") -> None:
        super().__init__(f"Cannot compute a percentile of an empty {what}")


class UsageError(LatencyStatsError):
    """Raised for invalid command-line arguments; the CLI answers with help text."""
