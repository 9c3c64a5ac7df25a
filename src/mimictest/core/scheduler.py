"""Trial scheduling and result aggregation.

Two strategies share one aggregation path:

- sequential (``--test-threads 1``): every trial runs on the calling thread,
  in input order, and its line is started before it runs;
- concurrent: trials run on a thread pool and report back through a single
  queue. Only the consumer of that queue prints and counts, so a trial's
  line is started right before its result is known and lines never
  interleave.
"""

import logging
import os
import queue
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from mimictest.config import Arguments
from mimictest.core.executor import describe_exception, execute_trial
from mimictest.core.filter import is_ignored_for_run
from mimictest.core.models import Conclusion, Outcome, OutcomeKind, Trial, TrialInfo
from mimictest.report.printer import Printer


logger = logging.getLogger(__name__)


class Aggregator:
    """Counts outcomes and remembers failures, in the order they are reported.

    Owned by a single thread of control; never shared with workers.
    """

    def __init__(self, conclusion: Conclusion, printer: Printer):
        self.conclusion = conclusion
        self.printer = printer
        self.failures: list[tuple[TrialInfo, Optional[str]]] = []

    def start(self, info: TrialInfo) -> None:
        """A trial's result is about to be reported."""
        self.printer.print_test(info)

    def finish(self, info: TrialInfo, outcome: Outcome) -> None:
        """Print a trial's result and count it."""
        self.printer.print_single_outcome(outcome)

        if outcome.kind == OutcomeKind.PASSED:
            self.conclusion.num_passed += 1
        elif outcome.kind == OutcomeKind.FAILED:
            self.conclusion.num_failed += 1
            self.failures.append((info, outcome.message))
        elif outcome.kind == OutcomeKind.IGNORED:
            self.conclusion.num_ignored += 1
        elif outcome.kind == OutcomeKind.MEASURED:
            self.conclusion.num_passed += 1
            self.conclusion.num_benches += 1


def default_num_threads() -> int:
    """Number of workers when none was requested: one per available processor."""
    return os.cpu_count() or 1


class Scheduler:
    """Executes trials and feeds their outcomes to an Aggregator."""

    def __init__(self, args: Arguments, aggregator: Aggregator):
        self.args = args
        self.aggregator = aggregator

    def execute(self, trials: list[Trial]) -> None:
        """Run all trials. Returns once every outcome has been reported."""
        if self.args.num_threads == 1:
            self._run_sequential(trials)
        else:
            self._run_concurrent(trials, self.args.num_threads or default_num_threads())

    def _run_sequential(self, trials: list[Trial]) -> None:
        logger.debug("Running %d trials sequentially", len(trials))

        for trial in trials:
            # Print `test foo ... `, run the trial, then finish the same line
            self.aggregator.start(trial.info)
            outcome = execute_trial(self.args, trial)
            self.aggregator.finish(trial.info, outcome)

    def _run_concurrent(self, trials: list[Trial], num_threads: int) -> None:
        logger.debug("Running %d trials on %d worker threads", len(trials), num_threads)

        completed: "queue.Queue[tuple[Outcome, TrialInfo]]" = queue.Queue()

        def work(trial: Trial) -> None:
            try:
                outcome = execute_trial(self.args, trial)
            except BaseException as e:
                # A worker cannot end the process; every trial must report back
                outcome = Outcome.failed(describe_exception(e))
            completed.put((outcome, trial.info))

        with ThreadPoolExecutor(max_workers=num_threads, thread_name_prefix="mimictest") as pool:
            for trial in trials:
                if is_ignored_for_run(self.args, trial):
                    # Resolved right away without occupying a worker
                    completed.put((execute_trial(self.args, trial), trial.info))
                else:
                    pool.submit(work, trial)

            for _ in range(len(trials)):
                outcome, info = completed.get()
                # The line is only started now; starting it at dispatch time
                # would interleave the output of trials finishing out of order
                self.aggregator.start(info)
                self.aggregator.finish(info, outcome)
