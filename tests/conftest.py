"""Pytest configuration and fixtures for the latency-stats tests."""

from pathlib import Path

import pytest

from latency_stats.config import ReportSettings


@pytest.fixture
def anyio_backend() -> str:
    """The swarm tests drive a raw asyncio server, so run them on asyncio only."""
    return "asyncio"


@pytest.fixture
def sample_lines() -> list[str]:
    """Two measurements: ttc=[1, 3] ms, ttfb=[2, 3] ms."""
    return ["1000000 2000000\n", "3000000 3000000\n"]


@pytest.fixture
def write_measurements(tmp_path: Path):
    """Write ``(ttc_ns, ttfb_ns)`` pairs (or raw lines) to a file and return its path."""

    def _write(name: str, rows: list[tuple[int, int]] | list[str]) -> Path:
        path = tmp_path / name
        lines = [row if isinstance(row, str) else f"{row[0]} {row[1]}" for row in rows]
        path.write_text("\n".join(lines) + "\n")
        return path

    return _write


@pytest.fixture
def small_bins() -> ReportSettings:
    return ReportSettings(nbins=3, bin_size=1)
