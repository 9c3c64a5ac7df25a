"""Pure rendering of the libtest console format.

Everything printed by the harness is built here from plain data, so the
format can be checked without running any trials. Tooling scrapes this
output, so tokens, separators and spacing must stay exactly as libtest
prints them.
"""

from typing import Iterable, Optional, Sequence

from mimictest.core.models import Conclusion, Measurement, Outcome, OutcomeKind, TrialInfo


OUTCOME_TOKENS = {
    OutcomeKind.PASSED: "ok",
    OutcomeKind.FAILED: "FAILED",
    OutcomeKind.IGNORED: "ignored",
    OutcomeKind.MEASURED: "bench",
}

OUTCOME_STYLES = {
    OutcomeKind.PASSED: "green",
    OutcomeKind.FAILED: "red",
    OutcomeKind.IGNORED: "yellow",
    OutcomeKind.MEASURED: "cyan",
}


def fmt_with_thousand_sep(value: int) -> str:
    """Format an integer with `,` as thousand separator."""
    return f"{value:,}"


def kind_label(kind: str) -> str:
    """The `[kind] ` prefix of a trial, or an empty string."""
    return f"[{kind}] " if kind else ""


def column_widths(infos: Iterable[TrialInfo]) -> tuple[int, int]:
    """Widths of the kind and name columns so all result tokens line up."""
    infos = list(infos)
    kind_width = max((len(kind_label(info.kind)) for info in infos), default=0)
    name_width = max((len(info.name) for info in infos), default=0)
    return kind_width, name_width


def render_title(num_tests: int) -> str:
    """The preamble line, e.g. `running 3 tests`."""
    plural_s = "" if num_tests == 1 else "s"
    return f"running {num_tests} test{plural_s}"


def render_test_start(info: TrialInfo, kind_width: int = 0, name_width: int = 0) -> str:
    """The start of a trial's line, printed before its result is known."""
    kind = kind_label(info.kind).ljust(kind_width)
    return f"test {kind}{info.name.ljust(name_width)} ... "


def outcome_token(outcome: Outcome) -> str:
    return OUTCOME_TOKENS[outcome.kind]


def render_measurement(measurement: Measurement) -> str:
    """Suffix of a benchmark result, e.g. `:       1,234 ns/iter (+/- 56)`."""
    avg = fmt_with_thousand_sep(measurement.avg)
    variance = fmt_with_thousand_sep(measurement.variance)
    return f": {avg:>11} ns/iter (+/- {variance})"


def render_outcome(outcome: Outcome) -> str:
    """The uncolored result text appended to a trial's line."""
    text = outcome_token(outcome)
    if outcome.kind == OutcomeKind.MEASURED and outcome.measurement is not None:
        text += render_measurement(outcome.measurement)
    return text


def render_failures(failures: Sequence[tuple[TrialInfo, Optional[str]]]) -> list[str]:
    """Lines of the failure block printed after all trials finished."""
    lines = ["", "failures:", ""]

    for info, msg in failures:
        lines.append(f"---- {info.name} ----")
        if msg is not None:
            lines.append(msg)
        lines.append("")

    lines.append("")
    lines.append("failures:")
    lines.extend(f"    {info.name}" for info, _ in failures)
    return lines


def summary_verdict(conclusion: Conclusion) -> Outcome:
    """The outcome whose token heads the summary line."""
    return Outcome.failed() if conclusion.has_failed() else Outcome.passed()


def render_summary_counts(conclusion: Conclusion) -> str:
    """The counter part of the summary line, after the verdict token."""
    return (
        f". {conclusion.num_passed} passed; {conclusion.num_failed} failed; "
        f"{conclusion.num_ignored} ignored; {conclusion.num_benches} measured; "
        f"{conclusion.num_filtered_out} filtered out"
    )


def render_summary(conclusion: Conclusion) -> str:
    """The full summary line, e.g. `test result: ok. 3 passed; ...`."""
    verdict = outcome_token(summary_verdict(conclusion))
    return f"test result: {verdict}{render_summary_counts(conclusion)}"


def render_list_entry(info: TrialInfo) -> str:
    """A line of `--list` output, e.g. `[kind] name: test`."""
    return f"{kind_label(info.kind)}{info.name}: {'bench' if info.is_bench else 'test'}"
