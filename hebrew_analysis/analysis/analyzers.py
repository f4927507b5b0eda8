"""
Hebrew Analyzers
================
Tokenizer plus filter chains for indexing and querying.

| Analyzer          | Emits                                         |
|-------------------|-----------------------------------------------|
| hebrew            | original, exact marker (word$), all lemmas    |
| hebrew_query      | original, all lemmas                          |
| hebrew_query_light| first lemma only (original if unknown)        |
| hebrew_exact      | exact marker only                             |
"""

from typing import List, Optional, Sequence

from ..dictionary import Dictionary
from .filters import (
    AddSuffixFilter,
    HebrewLemmatizerFilter,
    LowercaseFilter,
    NiqqudFilter,
    TokenFilter,
)
from .tokenizer import HebrewTokenizer, Token


class Analyzer:
    """A tokenizer followed by an ordered filter chain."""

    ANALYZER_NAME: str = "analyzer"

    def __init__(self, tokenizer: HebrewTokenizer, filters: Sequence[TokenFilter]):
        self.tokenizer = tokenizer
        self.filters = list(filters)

    def analyze(self, text: str) -> List[Token]:
        tokens = self.tokenizer.tokenize(text)
        for token_filter in self.filters:
            tokens = token_filter.filter(tokens)
        return tokens

    def terms(self, text: str) -> List[str]:
        """Just the token texts, in stream order."""
        return [t.text for t in self.analyze(text)]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(filters={[type(f).__name__ for f in self.filters]})"


class HebrewIndexingAnalyzer(Analyzer):
    ANALYZER_NAME = "hebrew"

    def __init__(self, dictionary: Dictionary, suffix: str = '$',
                 max_lemmas: Optional[int] = None):
        super().__init__(HebrewTokenizer(), [
            NiqqudFilter(),
            LowercaseFilter(),
            HebrewLemmatizerFilter(dictionary, keep_original=True, max_lemmas=max_lemmas),
            AddSuffixFilter(suffix, keep_original=True),
        ])


class HebrewQueryAnalyzer(Analyzer):
    ANALYZER_NAME = "hebrew_query"

    def __init__(self, dictionary: Dictionary, max_lemmas: Optional[int] = None):
        super().__init__(HebrewTokenizer(), [
            NiqqudFilter(),
            LowercaseFilter(),
            HebrewLemmatizerFilter(dictionary, keep_original=True, max_lemmas=max_lemmas),
        ])


class HebrewQueryLightAnalyzer(Analyzer):
    ANALYZER_NAME = "hebrew_query_light"

    def __init__(self, dictionary: Dictionary):
        super().__init__(HebrewTokenizer(), [
            NiqqudFilter(),
            LowercaseFilter(),
            HebrewLemmatizerFilter(dictionary, keep_original=False, max_lemmas=1),
        ])


class HebrewExactAnalyzer(Analyzer):
    """Matches surface forms only. Needs no lemmas, but keeps the common signature."""

    ANALYZER_NAME = "hebrew_exact"

    def __init__(self, dictionary: Optional[Dictionary] = None, suffix: str = '$'):
        super().__init__(HebrewTokenizer(), [
            NiqqudFilter(),
            LowercaseFilter(),
            AddSuffixFilter(suffix),
        ])
