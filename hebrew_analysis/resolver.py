"""
Dictionary Resolver
===================
Drives the search-and-load sequence for the selected loader.

Order: the configured override path (if any), then the loader's candidate
paths. The first successful load wins. Missing paths are skipped silently;
paths that exist but fail to load are logged and skipped. If nothing loads,
DictionaryNotFoundError lists every attempt.
"""

import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .config_logging import DictionaryLoadError, DictionaryNotFoundError, get_logger
from .dictionary import Dictionary
from .loaders.base import DictionaryLoader
from .privilege import Capability, grant, require_filesystem_access, run_privileged

_logger = get_logger('hebrew_analysis.resolver')

LOADED = 'loaded'
MISSING = 'missing'
FAILED = 'failed'


@dataclass(frozen=True)
class LoadAttempt:
    """Outcome of trying one path."""
    path: str
    loader_name: str
    outcome: str
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'path': self.path,
            'loader': self.loader_name,
            'outcome': self.outcome,
            'error': self.error,
        }


class DictionaryResolver:
    """Tries the override and candidate paths with one loader."""

    def __init__(self, loader: DictionaryLoader, capability: Optional[Capability] = None):
        self.loader = loader
        self.capability = capability if capability is not None else grant("resolver")
        self.attempts: List[LoadAttempt] = []

    def _load_at(self, path: str) -> Optional[Dictionary]:
        require_filesystem_access(path)
        if not os.path.exists(path):
            self.attempts.append(LoadAttempt(path, self.loader.name, MISSING))
            return None

        try:
            dictionary = self.loader.load(path)
        except (DictionaryLoadError, OSError, ValueError) as e:
            _logger.error(f"Failed loading {self.loader.name} dictionary from {path}: {e}",
                          path=path, loader=self.loader.name)
            self.attempts.append(LoadAttempt(path, self.loader.name, FAILED, str(e)))
            return None

        if dictionary is None:
            _logger.error(f"{self.loader.name} loader returned no dictionary for {path}",
                          path=path, loader=self.loader.name)
            self.attempts.append(LoadAttempt(path, self.loader.name, FAILED, "loader returned None"))
            return None

        self.attempts.append(LoadAttempt(path, self.loader.name, LOADED))
        return dictionary

    def try_path(self, path: str) -> Optional[Dictionary]:
        """Attempt a single load inside the privilege boundary."""
        _logger.info(f"Trying to load {self.loader.name} dictionary from path {path}",
                     path=path, loader=self.loader.name)
        dictionary = run_privileged(lambda: self._load_at(path), self.capability)
        if dictionary is not None:
            _logger.info(f"Dictionary '{self.loader.name}' loaded successfully from path {path}",
                         path=path, loader=self.loader.name, entries=len(dictionary))
        return dictionary

    def resolve(self, override_path: Optional[str] = None) -> Dictionary:
        """
        Find and load the dictionary.

        Args:
            override_path: Configured path tried before all candidates

        Returns:
            The first dictionary that loads

        Raises:
            DictionaryNotFoundError: override and every candidate failed
        """
        self.attempts = []

        if override_path:
            dictionary = self.try_path(override_path)
            if dictionary is not None:
                return dictionary

        for path in self.loader.candidate_paths():
            dictionary = self.try_path(path)
            if dictionary is not None:
                return dictionary

        tried = ', '.join(a.path for a in self.attempts) or 'none'
        raise DictionaryNotFoundError(
            f"Could not load any dictionary. Aborting! (tried: {tried})",
            attempts=self.attempts,
            loader=self.loader.name,
        )


def resolve(override_path: Optional[str], loader: DictionaryLoader,
            capability: Optional[Capability] = None) -> Dictionary:
    """Resolve a dictionary with loader; see DictionaryResolver.resolve()."""
    return DictionaryResolver(loader, capability).resolve(override_path)
