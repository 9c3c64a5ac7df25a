"""Run orchestration: the central entry point of the harness."""

import logging
from typing import Iterable, Optional

from rich.console import Console

from mimictest.config import Arguments
from mimictest.core.filter import apply_filters
from mimictest.core.models import Conclusion, Trial
from mimictest.core.scheduler import Aggregator, Scheduler
from mimictest.report.printer import Printer


logger = logging.getLogger(__name__)


def run(args: Arguments, trials: Iterable[Trial], console: Optional[Console] = None) -> Conclusion:
    """Run all given trials and print the results like libtest does.

    Filtering, `--list`, thread count, ignore flags and coloring are all taken
    from `args`. Capturing the output of trials (`--nocapture`) is left to the
    caller: trials are expected not to write to stdout while running.

    Args:
        args: Parsed run configuration
        trials: Trials to run; their runners are consumed
        console: Console to print to (default: stdout, colored per `args.color`)

    Returns:
        Conclusion with the counters of the run. With `--list` nothing is run
        and an empty Conclusion is returned.

    Raises:
        ConfigurationError: If an output format other than pretty is requested
    """
    args.ensure_supported()

    conclusion = Conclusion()
    trials, conclusion.num_filtered_out = apply_filters(args, list(trials))
    if conclusion.num_filtered_out:
        logger.debug("%d trials filtered out", conclusion.num_filtered_out)

    printer = Printer(args, trials, console)

    if args.list:
        printer.print_list(trials, args.ignored)
        return Conclusion()

    printer.print_title(len(trials))

    aggregator = Aggregator(conclusion, printer)
    Scheduler(args, aggregator).execute(trials)

    # Print failures if there were any, and the final summary
    if aggregator.failures:
        printer.print_failures(aggregator.failures)

    printer.print_summary(conclusion)

    return conclusion
