"""
Dictionary Loader Base Class
============================
Interface every dictionary loading strategy implements.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence, Tuple

from ..dictionary import Dictionary


class DictionaryLoader(ABC):
    """
    Strategy that produces a Dictionary from a filesystem path.

    Subclasses declare their own ordered default search paths. Enhanced
    loaders shipped outside this package must be constructible with no
    arguments.
    """

    LOADER_NAME: str = "Dictionary Loader"
    DEFAULT_PATHS: Tuple[str, ...] = ()

    def __init__(self, candidate_paths: Optional[Sequence[str]] = None):
        paths = self.DEFAULT_PATHS if candidate_paths is None else candidate_paths
        self._candidate_paths: Tuple[str, ...] = tuple(str(p) for p in paths)

    @property
    def name(self) -> str:
        """Human-readable loader name."""
        return self.LOADER_NAME

    def candidate_paths(self) -> Tuple[str, ...]:
        """Paths to try, highest priority first."""
        return self._candidate_paths

    @abstractmethod
    def load(self, path: str) -> Optional[Dictionary]:
        """
        Load a dictionary from path.

        Called only for paths that exist. Raise DictionaryLoadError (or
        OSError/ValueError) when the resource cannot be read or parsed;
        returning None is also treated as a failed attempt.
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
