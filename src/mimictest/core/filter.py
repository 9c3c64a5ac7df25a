"""Name based filtering and ignore policy."""

from mimictest.config import Arguments
from mimictest.core.models import Trial


def is_filtered_out(args: Arguments, trial: Trial) -> bool:
    """Return True if the trial is removed from the run by the filter or a skip pattern."""
    name = trial.name

    # If a filter was specified, apply it
    if args.filter_string is not None:
        if args.exact:
            if name != args.filter_string:
                return True
        elif args.filter_string not in name:
            return True

    for pattern in args.skip:
        if (name == pattern) if args.exact else (pattern in name):
            return True

    return False


def is_ignored_for_run(args: Arguments, trial: Trial) -> bool:
    """Return True if the trial is reported as ignored instead of being executed."""
    return (
        (trial.is_ignored and not args.ignored)
        or (trial.is_bench and args.test)
        or (not trial.is_bench and args.bench)
    )


def apply_filters(args: Arguments, trials: list[Trial]) -> tuple[list[Trial], int]:
    """Split off filtered out trials.

    Returns:
        The remaining trials in their original order and the number removed
    """
    if args.filter_string is None and not args.skip:
        return list(trials), 0

    kept = [trial for trial in trials if not is_filtered_out(args, trial)]
    return kept, len(trials) - len(kept)
