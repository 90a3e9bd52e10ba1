"""Percentile and histogram reports over TTC/TTFB latency measurements."""

__version__ = "0.1.0"
