"""Single trial execution.

This module runs one trial's runner and turns whatever happens into an
Outcome, so that a misbehaving trial never takes the whole run down.
"""

import logging
import traceback

from mimictest.config import Arguments
from mimictest.core.filter import is_ignored_for_run
from mimictest.core.models import Outcome, OutcomeKind, Trial


logger = logging.getLogger(__name__)


def execute_trial(args: Arguments, trial: Trial) -> Outcome:
    """Execute a trial and return its outcome.

    Ignored trials are not executed; their runner is dropped. Exceptions other
    than `Failed` escaping the runner are converted into a failed outcome whose
    message is the exception summary (e.g. ``ValueError: bad input``).
    Runners returning anything but an Outcome, or a measurement for a trial
    that is not a benchmark, fail as well.

    Args:
        args: Run configuration, used for the ignore policy
        trial: The trial to execute; its runner is consumed

    Returns:
        Outcome of the trial
    """
    runner = trial.take_runner()

    if is_ignored_for_run(args, trial):
        return Outcome.ignored()

    try:
        outcome = runner()
    except Exception as e:
        logger.debug("Trial %s raised an exception", trial.name, exc_info=True)
        return Outcome.failed(describe_exception(e))

    if not isinstance(outcome, Outcome):
        return Outcome.failed(
            f"runner returned {type(outcome).__name__}, expected Outcome"
        )
    if outcome.kind == OutcomeKind.MEASURED and not trial.is_bench:
        return Outcome.failed("runner of a test returned a measurement; only benchmarks are measured")
    return outcome


def describe_exception(exc: BaseException) -> str:
    """One line summary of an exception, like the last line of a traceback."""
    return "".join(traceback.format_exception_only(type(exc), exc)).strip()
