"""Unit tests for the aligned text renderings."""

from latency_stats.models import HistogramResult, PercentileReport, PercentileRow, SeriesKind
from latency_stats.report import format_number, render_histogram, render_percentiles


class TestFormatNumber:
    def test_integral_float(self):
        assert format_number(50.0) == "50"

    def test_fractional_float(self):
        assert format_number(99.9) == "99.9"

    def test_int(self):
        assert format_number(7) == "7"


class TestRenderPercentiles:
    def test_layout(self):
        report = PercentileReport(
            count=2,
            rows=[
                PercentileRow(rank=50, ttc=2.0, ttfb=2.5, delta=0.5),
                PercentileRow(rank=99.9, ttc=2.996, ttfb=2.999, delta=0.999),
            ],
        )
        lines = render_percentiles(report)
        assert lines[0] == "%5s %20s %20s %20s" % ("", "connect", "first byte", "delta")
        assert lines[1] == "%5s %20s %20s %20s" % ("50", "2.00", "2.50", "0.50")
        assert lines[2] == "%5s %20s %20s %20s" % ("99.9", "3.00", "3.00", "1.00")

    def test_column_widths(self):
        report = PercentileReport(count=1, rows=[PercentileRow(rank=50, ttc=1, ttfb=1, delta=0)])
        row = render_percentiles(report)[1]
        assert len(row) == 5 + 1 + 20 + 1 + 20 + 1 + 20


class TestRenderHistogram:
    def test_layout(self):
        result = HistogramResult(
            kind=SeriesKind.TTC,
            edges=[0, 50, 100],
            names=["a", "b"],
            counts={"a": [3, 1], "b": [0, 12]},
            dropped={"a": 0, "b": 0},
        )
        lines = render_histogram(result)
        assert lines == [
            "#          " + "%10s %10s" % ("a", "b"),
            "%10s %10s %10s" % ("0", 3, 0),
            "%10s %10s %10s" % ("50", 1, 12),
        ]

    def test_fractional_edges(self):
        result = HistogramResult(
            kind=SeriesKind.DELTA,
            edges=[0, 0.5, 1.0],
            names=["a"],
            counts={"a": [1, 1]},
            dropped={"a": 0},
        )
        lines = render_histogram(result)
        assert lines[1].split() == ["0", "1"]
        assert lines[2].split() == ["0.5", "1"]
