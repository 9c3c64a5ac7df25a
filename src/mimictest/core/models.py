"""Data models for trials, their outcomes and the run conclusion."""

import sys
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Optional


# Exit code used by libtest when at least one test failed
FAILURE_EXIT_CODE = 101


class Failed(Exception):
    """Indicates that a test or benchmark has failed. Optionally carries a message.

    Raise it from a trial's runner: ``raise Failed("expected 3, got 4")``.
    """

    def __init__(self, msg: Any = None):
        self.msg: Optional[str] = None if msg is None else str(msg)
        if self.msg is None:
            super().__init__()
        else:
            super().__init__(self.msg)

    @classmethod
    def without_message(cls) -> "Failed":
        return cls()

    def message(self) -> Optional[str]:
        return self.msg


@dataclass(frozen=True)
class Measurement:
    """Output of a benchmark."""

    avg: int
    """Average time in ns."""

    variance: int
    """Variance in ns."""

    def __post_init__(self):
        if self.avg < 0 or self.variance < 0:
            raise ValueError("Measurements must be non-negative")


class OutcomeKind(str, Enum):
    """Classification of a finished trial."""

    PASSED = "passed"
    FAILED = "failed"
    IGNORED = "ignored"
    MEASURED = "measured"


@dataclass(frozen=True)
class Outcome:
    """The outcome of performing a test or benchmark."""

    kind: OutcomeKind
    message: Optional[str] = None
    measurement: Optional[Measurement] = None

    @classmethod
    def passed(cls) -> "Outcome":
        return cls(OutcomeKind.PASSED)

    @classmethod
    def failed(cls, message: Optional[str] = None) -> "Outcome":
        return cls(OutcomeKind.FAILED, message=message)

    @classmethod
    def ignored(cls) -> "Outcome":
        return cls(OutcomeKind.IGNORED)

    @classmethod
    def measured(cls, measurement: Measurement) -> "Outcome":
        return cls(OutcomeKind.MEASURED, measurement=measurement)


@dataclass(frozen=True)
class TrialInfo:
    """Metadata of a trial. Travels together with the trial's outcome."""

    name: str
    kind: str = ""
    is_ignored: bool = False
    is_bench: bool = False


Runner = Callable[[], Outcome]


class Trial:
    """A single test or benchmark.

    libtest often counts benchmarks as "tests" too. The main parts are `name`,
    which is printed and used for filtering, and the runner, which is called
    exactly once when the trial is executed to determine its outcome.
    """

    def __init__(self, runner: Runner, info: TrialInfo):
        self._runner: Optional[Runner] = runner
        self.info = info

    @classmethod
    def test(cls, name: str, runner: Callable[[], Any]) -> "Trial":
        """Create a (non-benchmark) test.

        The runner passes by returning normally and fails by raising `Failed`.
        """

        def run_test() -> Outcome:
            try:
                runner()
            except Failed as failed:
                return Outcome.failed(failed.msg)
            return Outcome.passed()

        return cls(run_test, TrialInfo(name=name))

    @classmethod
    def bench(cls, name: str, runner: Callable[[], Measurement]) -> "Trial":
        """Create a benchmark. The runner returns a `Measurement` or raises `Failed`."""

        def run_bench() -> Outcome:
            try:
                measurement = runner()
            except Failed as failed:
                return Outcome.failed(failed.msg)
            if not isinstance(measurement, Measurement):
                raise TypeError(
                    f"benchmark runner returned {type(measurement).__name__}, expected Measurement"
                )
            return Outcome.measured(measurement)

        return cls(run_bench, TrialInfo(name=name, is_bench=True))

    @property
    def name(self) -> str:
        return self.info.name

    @property
    def kind(self) -> str:
        return self.info.kind

    @property
    def is_ignored(self) -> bool:
        return self.info.is_ignored

    @property
    def is_bench(self) -> bool:
        return self.info.is_bench

    def with_kind(self, kind: str) -> "Trial":
        """Set the "kind" of this trial, printed in brackets before its name
        (e.g. `test [my-kind] test_name`). (Default: empty)
        """
        return Trial(self.take_runner(), replace(self.info, kind=kind))

    def with_ignored_flag(self, is_ignored: bool) -> "Trial":
        """Set whether this trial is ignored. (Default: False)

        Ignored trials are only executed when the `--ignored` flag is given.
        """
        return Trial(self.take_runner(), replace(self.info, is_ignored=is_ignored))

    def take_runner(self) -> Runner:
        """Hand over the runner. A trial's runner can only be taken once."""
        runner = self._runner
        if runner is None:
            raise RuntimeError(f"runner of trial '{self.info.name}' was already taken")
        self._runner = None
        return runner

    @property
    def is_consumed(self) -> bool:
        return self._runner is None

    def __repr__(self) -> str:
        return (
            f"Trial(runner=<runner>, name={self.info.name!r}, kind={self.info.kind!r}, "
            f"is_ignored={self.info.is_ignored}, is_bench={self.info.is_bench})"
        )


@dataclass
class Conclusion:
    """Information about the entire run, returned by `run`.

    Usually you call `exit()` on it to end the process with the right exit
    code, but the counters can be inspected as well.
    """

    num_filtered_out: int = 0
    """Trials removed by the filter or by `--skip` patterns."""

    num_passed: int = 0
    """Passed tests, including benchmarks that were measured."""

    num_failed: int = 0
    """Failed tests and benchmarks."""

    num_ignored: int = 0
    """Ignored tests and benchmarks."""

    num_benches: int = 0
    """Benchmarks that successfully ran."""

    def has_failed(self) -> bool:
        """Return whether there have been any failures."""
        return self.num_failed > 0

    def exit(self) -> None:
        """Exit the process: 0 if everything passed, 101 if there were failures."""
        self.exit_if_failed()
        sys.exit(0)

    def exit_if_failed(self) -> None:
        """Exit with code 101 if there were failures, otherwise return normally."""
        if self.has_failed():
            sys.exit(FAILURE_EXIT_CODE)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "num_filtered_out": self.num_filtered_out,
            "num_passed": self.num_passed,
            "num_failed": self.num_failed,
            "num_ignored": self.num_ignored,
            "num_benches": self.num_benches,
        }
