"""Tests for the console printer."""

import io

from rich.console import Console

from mimictest.config import Arguments, ColorSetting
from mimictest.core.models import Conclusion, Measurement, Outcome, Trial
from mimictest.report.printer import Printer, make_console


def colored_console() -> Console:
    return Console(file=io.StringIO(), force_terminal=True, color_system="standard", highlight=False)


class TestPrinter:
    """Tests for Printer."""

    def test_title(self, console):
        Printer(Arguments(), [], console).print_title(2)
        assert console.file.getvalue() == "\nrunning 2 tests\n"

    def test_test_line_aligned(self, console):
        trials = [Trial.test("a", lambda: None), Trial.test("abc", lambda: None)]
        printer = Printer(Arguments(), trials, console)

        printer.print_test(trials[0].info)
        printer.print_single_outcome(Outcome.passed())

        assert console.file.getvalue() == "test a   ... ok\n"

    def test_long_names_are_not_wrapped(self, console):
        """Test that lines longer than the console are written untouched."""
        name = "module::" * 20 + "test"
        trial = Trial.test(name, lambda: None)
        printer = Printer(Arguments(), [trial], console)

        printer.print_test(trial.info)
        printer.print_single_outcome(Outcome.ignored())

        assert console.file.getvalue() == f"test {name} ... ignored\n"

    def test_bench_outcome(self, console):
        printer = Printer(Arguments(), [], console)
        printer.print_single_outcome(Outcome.measured(Measurement(avg=100000, variance=1)))
        assert console.file.getvalue() == "bench:" + " " * 5 + "100,000 ns/iter (+/- 1)\n"

    def test_summary(self, console):
        Printer(Arguments(), [], console).print_summary(Conclusion(num_passed=1, num_benches=1))
        assert console.file.getvalue() == (
            "\ntest result: ok. 1 passed; 0 failed; 0 ignored; 1 measured; 0 filtered out\n\n"
        )

    def test_colored_tokens(self):
        """Test that color changes the styling but never the token."""
        console = colored_console()
        printer = Printer(Arguments(color=ColorSetting.ALWAYS), [], console)

        printer.print_single_outcome(Outcome.passed())
        printer.print_single_outcome(Outcome.failed())
        output = console.file.getvalue()

        assert "\x1b[32mok\x1b[0m" in output
        assert "\x1b[31mFAILED\x1b[0m" in output

    def test_uncolored_tokens(self, console):
        printer = Printer(Arguments(color=ColorSetting.NEVER), [], console)
        printer.print_single_outcome(Outcome.failed())
        assert console.file.getvalue() == "FAILED\n"


class TestMakeConsole:
    """Tests for make_console."""

    def test_never(self):
        assert make_console(ColorSetting.NEVER).color_system is None

    def test_always(self):
        assert make_console(ColorSetting.ALWAYS).is_terminal
