"""Core filtering, scheduling and execution functionality."""

from mimictest.core.discovery import TrialDiscovery
from mimictest.core.models import Conclusion, Failed, Measurement, Outcome, Trial
from mimictest.core.runner import run
from mimictest.core.scheduler import Scheduler

__all__ = ["Conclusion", "Failed", "Measurement", "Outcome", "Scheduler", "Trial", "TrialDiscovery", "run"]
