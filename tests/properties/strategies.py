"""Hypothesis strategies for measurement data and report settings."""

from hypothesis import strategies as st

from latency_stats.config import ReportSettings

# Nanosecond timestamps in the range a benchmark run actually produces (< ~17 minutes)
nanos = st.integers(min_value=0, max_value=10**12)

ranks = st.floats(min_value=0, max_value=100, allow_nan=False, allow_infinity=False)

sorted_samples = st.lists(
    st.integers(min_value=-(10**12), max_value=10**12), min_size=1, max_size=200
).map(sorted)

ms_values = st.lists(st.integers(min_value=-50, max_value=5000), max_size=200)


@st.composite
def measurement_lines(draw, min_size: int = 0) -> list[str]:
    pairs = draw(st.lists(st.tuples(nanos, nanos), min_size=min_size, max_size=100))
    sep = draw(st.sampled_from([" ", "  ", "\t"]))
    return [f"{ttc}{sep}{ttfb}\n" for ttc, ttfb in pairs]


@st.composite
def report_settings(draw) -> ReportSettings:
    return ReportSettings(
        nbins=draw(st.integers(min_value=1, max_value=100)),
        bin_size=draw(
            st.one_of(
                st.integers(min_value=1, max_value=200),
                st.floats(min_value=0.5, max_value=200, allow_nan=False),
            )
        ),
    )


source_names = st.text(
    alphabet=st.characters(categories=("Ll", "Lu", "Nd")), min_size=1, max_size=8
)
