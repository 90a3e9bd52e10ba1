"""Data models for measurements, sources, and report results."""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path  # noqa: TC003 — pydantic resolves field types at runtime

from pydantic import BaseModel, ConfigDict, Field


class SeriesKind(StrEnum):
    TTC = "ttc"
    TTFB = "ttfb"
    DELTA = "delta"


class Measurement(BaseModel):
    model_config = ConfigDict(frozen=True)

    ttc: int
    ttfb: int

    @property
    def delta(self) -> int:
        return self.ttfb - self.ttc


class LatencyData(BaseModel):
    """Three parallel series collected from one input, in input order."""

    ttcs: list[int | float] = Field(default_factory=list)
    ttfbs: list[int | float] = Field(default_factory=list)
    deltas: list[int | float] = Field(default_factory=list)

    def series(self, kind: SeriesKind) -> list[int | float]:
        match kind:
            case SeriesKind.TTC:
                return self.ttcs
            case SeriesKind.TTFB:
                return self.ttfbs
            case SeriesKind.DELTA:
                return self.deltas

    def __len__(self) -> int:
        return len(self.ttcs)


class NamedSource(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    path: Path


class PercentileRow(BaseModel):
    rank: float
    ttc: float
    ttfb: float
    delta: float


class PercentileReport(BaseModel):
    count: int
    rows: list[PercentileRow]


class HistogramResult(BaseModel):
    kind: SeriesKind
    edges: list[float]
    names: list[str]
    counts: dict[str, list[int]]
    dropped: dict[str, int]

    @property
    def bin_starts(self) -> list[float]:
        return self.edges[:-1]

    def column(self, name: str) -> list[int]:
        return self.counts[name]


class SwarmPlan(BaseModel):
    """Target and connection counts for one load-generation run."""

    model_config = ConfigDict(frozen=True)

    host: str = Field(min_length=1)
    port: int = Field(ge=1, le=65535)
    url: str = Field(min_length=1)
    nactive: int = Field(ge=0, description="Timed requests, one connection each")
    nidle: int = Field(default=0, ge=0, description="Connections held open without requests")
    nthreads: int = Field(default=1, ge=1, description="Worker threads, one event loop each")

    def request(self) -> bytes:
        return (
            f"GET {self.url} HTTP/1.1\r\n"
            f"Host: {self.host}:{self.port}\r\n"
            "Connection: close\r\n"
            "\r\n"
        ).encode("ascii")
