"""Tests for rendering the libtest console format."""

import pytest

from mimictest.core.models import Conclusion, Measurement, Outcome, TrialInfo
from mimictest.report.format import (
    column_widths,
    fmt_with_thousand_sep,
    render_failures,
    render_list_entry,
    render_measurement,
    render_outcome,
    render_summary,
    render_test_start,
    render_title,
)


class TestThousandSeparator:
    """Tests for fmt_with_thousand_sep."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (0, "0"),
            (999, "999"),
            (1000, "1,000"),
            (1001, "1,001"),
            (1234567, "1,234,567"),
            (100000000, "100,000,000"),
        ],
    )
    def test_values(self, value, expected):
        assert fmt_with_thousand_sep(value) == expected


class TestTitle:
    """Tests for the preamble."""

    def test_plural(self):
        assert render_title(3) == "running 3 tests"
        assert render_title(0) == "running 0 tests"

    def test_singular(self):
        assert render_title(1) == "running 1 test"


class TestTestLine:
    """Tests for the start of per-trial lines."""

    def test_plain(self):
        assert render_test_start(TrialInfo(name="a")) == "test a ... "

    def test_with_kind(self):
        assert render_test_start(TrialInfo(name="a", kind="tidy")) == "test [tidy] a ... "

    def test_columns_are_padded(self):
        """Test that names and kinds are padded so results line up."""
        infos = [
            TrialInfo(name="short", kind="k"),
            TrialInfo(name="much_longer"),
        ]
        kind_width, name_width = column_widths(infos)
        assert (kind_width, name_width) == (4, 11)
        assert render_test_start(infos[0], kind_width, name_width) == "test [k] short" + " " * 6 + " ... "
        assert render_test_start(infos[1], kind_width, name_width) == "test " + " " * 4 + "much_longer ... "

    def test_column_widths_empty(self):
        assert column_widths([]) == (0, 0)


class TestOutcome:
    """Tests for result tokens."""

    def test_tokens(self):
        assert render_outcome(Outcome.passed()) == "ok"
        assert render_outcome(Outcome.failed("boom")) == "FAILED"
        assert render_outcome(Outcome.ignored()) == "ignored"

    def test_measurement(self):
        outcome = Outcome.measured(Measurement(avg=1234567, variance=8910))
        assert render_outcome(outcome) == "bench:   1,234,567 ns/iter (+/- 8,910)"

    def test_measurement_alignment(self):
        """Test that the average is right aligned in 11 columns."""
        assert render_measurement(Measurement(avg=5, variance=0)) == ":" + " " * 11 + "5 ns/iter (+/- 0)"


class TestFailures:
    """Tests for the failure block."""

    def test_single_failure(self):
        lines = render_failures([(TrialInfo(name="b"), "boom")])
        assert lines == [
            "",
            "failures:",
            "",
            "---- b ----",
            "boom",
            "",
            "",
            "failures:",
            "    b",
        ]

    def test_failure_without_message(self):
        """Test that a failure without a message still lists its name."""
        lines = render_failures([(TrialInfo(name="x"), None), (TrialInfo(name="y"), "line 1\nline 2")])
        assert "\n".join(lines) == (
            "\nfailures:\n\n"
            "---- x ----\n\n"
            "---- y ----\nline 1\nline 2\n\n"
            "\nfailures:\n    x\n    y"
        )


class TestSummary:
    """Tests for the summary line."""

    def test_success(self):
        conclusion = Conclusion(num_passed=2, num_ignored=1, num_filtered_out=4)
        assert render_summary(conclusion) == (
            "test result: ok. 2 passed; 0 failed; 1 ignored; 0 measured; 4 filtered out"
        )

    def test_failure(self):
        conclusion = Conclusion(num_passed=1, num_failed=1, num_ignored=1)
        assert render_summary(conclusion) == (
            "test result: FAILED. 1 passed; 1 failed; 1 ignored; 0 measured; 0 filtered out"
        )

    def test_empty(self):
        assert render_summary(Conclusion()) == (
            "test result: ok. 0 passed; 0 failed; 0 ignored; 0 measured; 0 filtered out"
        )


class TestListEntry:
    """Tests for --list lines."""

    def test_test(self):
        assert render_list_entry(TrialInfo(name="check_toph")) == "check_toph: test"

    def test_bench_with_kind(self):
        assert render_list_entry(TrialInfo(name="fast", kind="perf", is_bench=True)) == "[perf] fast: bench"
