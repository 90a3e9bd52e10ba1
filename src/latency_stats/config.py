"""Report settings.

Defaults can be overridden through ``LATENCY_STATS_*`` environment variables
(e.g. ``LATENCY_STATS_NBINS=128``); command-line options take precedence and
produce an updated copy via :meth:`ReportSettings.with_overrides`.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_RANKS: tuple[float, ...] = (50, 75, 90, 95, 99, 99.9)


class ReportSettings(BaseSettings):
    """Immutable configuration shared by the percentile and histogram reports."""

    nbins: int = Field(default=64, ge=1, description="Number of histogram bins")
    bin_size: float = Field(default=50, gt=0, description="Histogram bin width in ms")
    ranks: tuple[float, ...] = Field(
        default=DEFAULT_RANKS, description="Percentile ranks reported, in output order"
    )

    model_config = SettingsConfigDict(env_prefix="LATENCY_STATS_", frozen=True)

    @field_validator("ranks")
    @classmethod
    def _ranks_in_range(cls, ranks: tuple[float, ...]) -> tuple[float, ...]:
        if not ranks:
            raise ValueError("at least one percentile rank is required")
        for rank in ranks:
            if not 0 <= rank <= 100:
                raise ValueError(f"percentile rank {rank} is outside [0, 100]")
        return ranks

    def with_overrides(self, **overrides: Any) -> ReportSettings:
        """Return a validated copy with the non-None overrides applied."""
        values = self.model_dump()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return ReportSettings.model_validate(values)
