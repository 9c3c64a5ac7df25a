"""Console output of a run.

The Printer is the only component that writes to the output. It is never
called from more than one thread: in concurrent runs the consumer loop of the
scheduler is its sole user.
"""

from typing import Iterable, Optional, Sequence

from rich.console import Console

from mimictest.config import Arguments, ColorSetting
from mimictest.core.models import Conclusion, Outcome, Trial, TrialInfo
from mimictest.report.format import (
    OUTCOME_STYLES,
    column_widths,
    outcome_token,
    render_failures,
    render_list_entry,
    render_measurement,
    render_summary_counts,
    render_test_start,
    render_title,
    summary_verdict,
)


def make_console(color: ColorSetting) -> Console:
    """Create a stdout console honoring the color setting."""
    if color == ColorSetting.ALWAYS:
        return Console(force_terminal=True, soft_wrap=True, highlight=False)
    if color == ColorSetting.NEVER:
        return Console(color_system=None, soft_wrap=True, highlight=False)
    return Console(soft_wrap=True, highlight=False)


class Printer:
    """Prints the libtest console format, piece by piece."""

    def __init__(self, args: Arguments, trials: Iterable[Trial], console: Optional[Console] = None):
        """Initialize the printer.

        Args:
            args: Run configuration (color setting)
            trials: The trials of the run, used to align the result column
            console: Console to write to (default: stdout)
        """
        self.console = console or make_console(args.color)
        self.kind_width, self.name_width = column_widths(trial.info for trial in trials)

    def _write(self, text: str = "", end: str = "\n") -> None:
        # Plain text bypasses rich so long lines are never wrapped or stripped
        self.console.file.write(text + end)

    def _write_styled(self, text: str, style: str) -> None:
        self.console.out(text, end="", style=style, highlight=False)

    def print_title(self, num_tests: int) -> None:
        """Print the preamble: an empty line and `running N tests`."""
        self._write()
        self._write(render_title(num_tests))

    def print_test(self, info: TrialInfo) -> None:
        """Print `test name ... ` without a newline; the outcome follows later."""
        self._write(render_test_start(info, self.kind_width, self.name_width), end="")
        self.console.file.flush()

    def print_single_outcome(self, outcome: Outcome) -> None:
        """Finish a trial's line with its result."""
        self._print_outcome(outcome)
        self._write()

    def print_failures(self, failures: Sequence[tuple[TrialInfo, Optional[str]]]) -> None:
        """Print messages of all failed trials followed by their names."""
        for line in render_failures(failures):
            self._write(line)

    def print_summary(self, conclusion: Conclusion) -> None:
        """Print the final `test result: ...` line."""
        self._write()
        self._write("test result: ", end="")
        self._print_outcome(summary_verdict(conclusion))
        self._write(render_summary_counts(conclusion))
        self._write()

    def print_list(self, trials: Iterable[Trial], ignored: bool) -> None:
        """Print all trials (or only the ignored ones if `ignored`) for `--list`."""
        for trial in trials:
            # libtest lists everything, or just the ignored tests with --ignored
            if ignored and not trial.is_ignored:
                continue
            self._write(render_list_entry(trial.info))

    def _print_outcome(self, outcome: Outcome) -> None:
        """Print the colored token, plus the timing of a benchmark."""
        self._write_styled(outcome_token(outcome), OUTCOME_STYLES[outcome.kind])
        if outcome.measurement is not None:
            self._write(render_measurement(outcome.measurement), end="")
