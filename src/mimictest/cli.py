"""Command-line interface for mimictest."""

import logging
import sys
from pathlib import Path
from typing import Any, Callable, Optional, Sequence

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from mimictest import __version__
from mimictest.config import Arguments, ColorSetting, ConfigurationError, FormatSetting


# Results go to stdout; errors and logs to stderr so they never mix with the
# output scraped by tooling
console = Console(stderr=True)


def harness_options(f: Callable) -> Callable:
    """Attach the libtest command line flags and the optional FILTER argument."""
    decorators = [
        click.argument("filter_string", metavar="[FILTER]", required=False),
        click.option("--test", is_flag=True, help="Run only tests and ignore benchmarks"),
        click.option("--bench", is_flag=True, help="Run only benchmarks and ignore tests"),
        click.option("--list", "list_", is_flag=True, help="List all tests and benchmarks"),
        click.option("--nocapture", is_flag=True, help="Accepted for compatibility; output is not captured"),
        click.option("--exact", is_flag=True, help="Exactly match filters rather than by substring"),
        click.option("--ignored", is_flag=True, help="Run ignored tests"),
        click.option("--quiet", "-q", is_flag=True, help="Display one character per test instead of one line"),
        click.option(
            "--test-threads",
            "num_threads",
            type=click.IntRange(min=1),
            help="Number of threads used for running tests in parallel",
        ),
        click.option(
            "--skip",
            multiple=True,
            metavar="FILTER",
            help="Skip tests whose names contain FILTER (can be given multiple times)",
        ),
        click.option(
            "--color",
            type=click.Choice([c.value for c in ColorSetting]),
            default=ColorSetting.AUTO.value,
            show_default=True,
            help="Configure coloring of output",
        ),
        click.option(
            "--format",
            "format_",
            type=click.Choice([f.value for f in FormatSetting]),
            default=FormatSetting.PRETTY.value,
            show_default=True,
            help="Configure formatting of output",
        ),
    ]
    for decorator in reversed(decorators):
        f = decorator(f)
    return f


def build_arguments(options: dict[str, Any]) -> Arguments:
    """Turn parsed click options into Arguments."""
    try:
        return Arguments(
            filter_string=options.get("filter_string"),
            test=options.get("test", False),
            bench=options.get("bench", False),
            list=options.get("list_", False),
            nocapture=options.get("nocapture", False),
            exact=options.get("exact", False),
            ignored=options.get("ignored", False),
            quiet=options.get("quiet", False),
            num_threads=options.get("num_threads"),
            skip=list(options.get("skip", ())),
            color=options.get("color", ColorSetting.AUTO.value),
            format=options.get("format_", FormatSetting.PRETTY.value),
        )
    except ValidationError as e:
        raise click.UsageError(str(e)) from e


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@harness_options
def _arguments_command(**options: Any) -> Arguments:
    return build_arguments(options)


def parse_arguments(argv: Optional[Sequence[str]] = None) -> Arguments:
    """Parse libtest-style arguments for harnesses embedding `run`.

    Exits the process on --help or invalid arguments, like a CLI would.
    """
    if argv is None:
        argv = sys.argv[1:]

    try:
        result = _arguments_command.main(
            args=list(argv),
            prog_name=Path(sys.argv[0]).name or "harness",
            standalone_mode=False,
        )
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)

    if not isinstance(result, Arguments):
        # --help was printed
        sys.exit(result or 0)
    return result


def setup_logging(verbose: bool) -> None:
    """Send debug logs of the harness to stderr when --verbose is given."""
    if not verbose:
        return

    handler = RichHandler(console=console, show_path=False)
    handler.setFormatter(logging.Formatter("%(name)s %(message)s"))
    root = logging.getLogger("mimictest")
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="mimictest")
@click.argument("target")
@harness_options
@click.option("--verbose", "-v", is_flag=True, help="Log scheduling details to stderr")
def main(target: str, verbose: bool, **options: Any) -> None:
    """mimictest - run trials and report them like cargo test.

    TARGET is 'package.module:attribute', naming a list of trials or a
    function returning them. FILTER only runs trials whose names contain it.
    """
    setup_logging(verbose)
    args = build_arguments(options)

    from mimictest.core.discovery import DiscoveryError, TrialDiscovery
    from mimictest.core.runner import run

    try:
        trials = TrialDiscovery(Path.cwd()).load(target)
    except DiscoveryError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)

    try:
        conclusion = run(args, trials)
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)

    conclusion.exit()


if __name__ == "__main__":
    main()
