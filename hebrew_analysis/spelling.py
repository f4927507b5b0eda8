"""
Dictionary Spelling Suggestions
===============================
SymSpell index over the loaded dictionary's surface forms, used by the
check-word endpoint to suggest corrections for unknown words.

Requires: pip install symspellpy
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .config_logging import get_logger
from .dictionary import Dictionary

_logger = get_logger('hebrew_analysis.spelling')


@dataclass
class SpellingSuggestion:
    """A spelling suggestion with metadata."""
    suggestion: str
    distance: int
    frequency: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'suggestion': self.suggestion,
            'distance': self.distance,
            'frequency': self.frequency,
        }


class DictionarySpeller:
    """
    SymSpell-based suggester built from a Dictionary.

    The index is built on first use; building it for a large dictionary
    takes a moment, and most deployments never call the endpoint.
    """

    INTEGRATION_NAME = "SymSpell"
    MAX_SUGGESTIONS = 5

    def __init__(self, dictionary: Dictionary, max_edit_distance: int = 2, prefix_length: int = 7):
        self.dictionary = dictionary
        self.max_edit_distance = max_edit_distance
        self.prefix_length = prefix_length

        self._sym_spell = None
        self._verbosity = None
        self._available: Optional[bool] = None
        self._error: Optional[str] = None

    def _build_index(self):
        """Create the SymSpell index (once)."""
        if self._available is not None:
            return

        try:
            from symspellpy import SymSpell, Verbosity
        except ImportError as e:
            self._error = f"symspellpy not installed: {e}"
            self._available = False
            _logger.warning(self._error)
            return

        sym_spell = SymSpell(
            max_dictionary_edit_distance=self.max_edit_distance,
            prefix_length=self.prefix_length
        )
        # Lemmas are seen more often than their inflections
        lemmas = {lemma for forms in self.dictionary.entries.values() for lemma in forms}
        for word in self.dictionary.words():
            sym_spell.create_dictionary_entry(word, 10 if word in lemmas else 1)

        self._sym_spell = sym_spell
        self._verbosity = Verbosity
        self._available = True
        _logger.info(f"Built spelling index with {len(self.dictionary)} words",
                     entries=len(self.dictionary))

    @property
    def is_available(self) -> bool:
        self._build_index()
        return bool(self._available)

    @property
    def error(self) -> Optional[str]:
        return self._error

    def suggest(self, word: str) -> List[SpellingSuggestion]:
        """
        Suggest dictionary words close to word.

        Returns:
            Up to five suggestions, closest first (empty if the word is known
            or symspellpy is unavailable)
        """
        if not word or not self.is_available:
            return []

        results = []
        for item in self._sym_spell.lookup(
            word,
            self._verbosity.CLOSEST,
            max_edit_distance=self.max_edit_distance
        ):
            if item.term == word and item.distance == 0:
                return []
            results.append(SpellingSuggestion(
                suggestion=item.term,
                distance=item.distance,
                frequency=item.count
            ))

        return results[:self.MAX_SUGGESTIONS]

    def get_status(self) -> Dict[str, Any]:
        """Get detailed status of the suggester."""
        status = {
            'available': self.is_available,
            'error': self._error,
            'max_edit_distance': self.max_edit_distance,
        }
        if self._sym_spell is not None:
            status['dictionary_size'] = len(self._sym_spell.words)
        return status
