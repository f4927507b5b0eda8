"""
Shared Dictionary Registry
==========================
Write-once, read-many holder for the loaded dictionary.

The plugin creates one handle, sets it during construction, and passes it to
every component provider. Reads never lock: the value is immutable and
published before any provider can run.
"""

from typing import Optional

from .config_logging import DictionaryAlreadyLoadedError, DictionaryNotLoadedError
from .dictionary import Dictionary


class DictionaryHandle:
    """Single slot, set at most once."""

    __slots__ = ('_dictionary',)

    def __init__(self):
        self._dictionary: Optional[Dictionary] = None

    @property
    def is_set(self) -> bool:
        return self._dictionary is not None

    def set(self, dictionary: Dictionary):
        """Store the dictionary. A second call raises DictionaryAlreadyLoadedError."""
        if dictionary is None:
            raise ValueError("Cannot register an empty dictionary")
        if self._dictionary is not None:
            raise DictionaryAlreadyLoadedError(source=self._dictionary.source)
        self._dictionary = dictionary

    def get(self) -> Dictionary:
        """Return the stored dictionary."""
        if self._dictionary is None:
            raise DictionaryNotLoadedError()
        return self._dictionary

    def __repr__(self) -> str:
        if self._dictionary is None:
            return "DictionaryHandle(<unset>)"
        return f"DictionaryHandle({self._dictionary.name!r}, source={self._dictionary.source!r})"
