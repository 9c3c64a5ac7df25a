"""
mimictest - write your own test harnesses that look and behave like cargo test.

This package provides tools to:
- Describe tests and benchmarks as named trials with a one-shot runner
- Filter them with libtest-style arguments (filter, --exact, --skip, --ignored)
- Run them sequentially or on a worker pool
- Print results in the exact console format of Rust's libtest
"""

__version__ = "0.1.0"
__author__ = "mimictest Team"

from mimictest.config import Arguments, ColorSetting, ConfigurationError, FormatSetting
from mimictest.core.models import Conclusion, Failed, Measurement, Outcome, Trial
from mimictest.core.runner import run

__all__ = [
    "Arguments",
    "ColorSetting",
    "Conclusion",
    "ConfigurationError",
    "Failed",
    "FormatSetting",
    "Measurement",
    "Outcome",
    "Trial",
    "run",
]
