"""Run configuration for mimictest."""

from enum import Enum
from typing import List, Optional, Sequence

from pydantic import BaseModel, Field, field_validator, model_validator


class ColorSetting(str, Enum):
    """When to color the output."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


class FormatSetting(str, Enum):
    """Output format requested on the command line."""

    PRETTY = "pretty"
    TERSE = "terse"
    JSON = "json"


class ConfigurationError(Exception):
    """Raised when a run is configured in a way this harness cannot honor."""

    pass


class Arguments(BaseModel):
    """Command line arguments understood by the harness.

    The field names follow the flags of libtest (`cargo test -- --help`).
    """

    test: bool = Field(default=False, description="Run only tests and ignore benchmarks")
    bench: bool = Field(default=False, description="Run only benchmarks and ignore tests")
    nocapture: bool = Field(
        default=False,
        description="Accepted for compatibility; capturing is left to the caller",
    )
    exact: bool = Field(default=False, description="Match the filter and skip patterns exactly")
    ignored: bool = Field(default=False, description="Run ignored tests as well")
    quiet: bool = Field(default=False, description="Display one character per test (terse format)")
    num_threads: Optional[int] = Field(
        default=None,
        description="Number of worker threads; 1 runs everything on the calling thread",
    )
    skip: List[str] = Field(default_factory=list, description="Skip tests whose names contain these")
    color: ColorSetting = Field(default=ColorSetting.AUTO, description="Configure coloring of output")
    format: FormatSetting = Field(default=FormatSetting.PRETTY, description="Configure formatting of output")
    filter_string: Optional[str] = Field(
        default=None,
        description="Only run tests whose names contain this string",
    )
    # Declared last since the name shadows the builtin inside the class body
    list: bool = Field(default=False, description="List all tests and benchmarks instead of running them")

    @field_validator("num_threads")
    @classmethod
    def validate_num_threads(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 1:
            raise ValueError("Number of test threads must be at least 1")
        return v

    @field_validator("color", "format", mode="before")
    @classmethod
    def normalize_setting(cls, v):
        if isinstance(v, str):
            return v.lower()
        return v

    @model_validator(mode="after")
    def apply_quiet(self) -> "Arguments":
        # `-q` is a shorthand for `--format terse`, like in libtest
        if self.quiet and self.format == FormatSetting.PRETTY:
            self.format = FormatSetting.TERSE
        return self

    @classmethod
    def from_args(cls, argv: Optional[Sequence[str]] = None) -> "Arguments":
        """Parse libtest-style command line arguments.

        Args:
            argv: Arguments without the program name (default: sys.argv[1:])

        Returns:
            Parsed Arguments; exits the process on invalid arguments or --help
        """
        from mimictest.cli import parse_arguments

        return parse_arguments(argv)

    def ensure_supported(self) -> None:
        """Raise ConfigurationError for settings the harness cannot run with."""
        if self.format != FormatSetting.PRETTY:
            raise ConfigurationError(
                f"Output format '{self.format.value}' is not supported; only 'pretty' is implemented"
            )
