"""Trial discovery functionality."""

import importlib
import sys
from pathlib import Path
from typing import Optional

from mimictest.core.models import Trial


class DiscoveryError(Exception):
    """Raised when a target does not resolve to a collection of trials."""

    pass


class TrialDiscovery:
    """Loads trials from a `package.module:attribute` target.

    The attribute is either an iterable of trials or a callable taking no
    arguments that returns one.
    """

    def __init__(self, base_dir: Optional[Path] = None):
        """Initialize trial discovery.

        Args:
            base_dir: Directory made importable while loading the target
        """
        self.base_dir = base_dir

    def load(self, target: str) -> list[Trial]:
        """Resolve the target into trials.

        Raises:
            DiscoveryError: If the target is malformed, cannot be imported or
                does not produce trials
        """
        module_name, _, attribute = target.partition(":")
        if not module_name or not attribute:
            raise DiscoveryError(f"Target must look like 'package.module:attribute', got '{target}'")

        added_path = None
        if self.base_dir is not None and str(self.base_dir) not in sys.path:
            added_path = str(self.base_dir)
            sys.path.insert(0, added_path)

        try:
            return self._resolve(target, module_name, attribute)
        finally:
            if added_path is not None and added_path in sys.path:
                sys.path.remove(added_path)

    def _resolve(self, target: str, module_name: str, attribute: str) -> list[Trial]:
        try:
            module = importlib.import_module(module_name)
        except Exception as e:
            raise DiscoveryError(f"Cannot import module '{module_name}': {e}") from e

        obj = module
        for part in attribute.split("."):
            try:
                obj = getattr(obj, part)
            except AttributeError as e:
                raise DiscoveryError(f"Module '{module_name}' has no attribute '{attribute}'") from e

        if callable(obj):
            try:
                obj = obj()
            except Exception as e:
                raise DiscoveryError(f"Calling '{target}' failed: {type(e).__name__}: {e}") from e

        try:
            trials = list(obj)
        except TypeError as e:
            raise DiscoveryError(f"'{target}' did not produce an iterable of trials") from e
        except Exception as e:
            raise DiscoveryError(f"Collecting trials from '{target}' failed: {type(e).__name__}: {e}") from e

        for trial in trials:
            if not isinstance(trial, Trial):
                raise DiscoveryError(
                    f"'{target}' produced a {type(trial).__name__}, expected Trial"
                )

        return trials
