"""
Hebrew Analysis Components
==========================
Tokenizer, token filters and analyzers registered with the host runtime.
"""

from .tokenizer import EXACT, HEBREW, LEMMA, NON_HEBREW, NUMERIC, HebrewTokenizer, Token
from .filters import (
    AddSuffixFilter,
    HebrewLemmatizerFilter,
    LowercaseFilter,
    NiqqudFilter,
    TokenFilter,
    strip_niqqud,
)
from .analyzers import (
    Analyzer,
    HebrewExactAnalyzer,
    HebrewIndexingAnalyzer,
    HebrewQueryAnalyzer,
    HebrewQueryLightAnalyzer,
)

__all__ = [
    'Token', 'HebrewTokenizer',
    'HEBREW', 'NON_HEBREW', 'NUMERIC', 'LEMMA', 'EXACT',
    'TokenFilter', 'NiqqudFilter', 'LowercaseFilter', 'AddSuffixFilter',
    'HebrewLemmatizerFilter', 'strip_niqqud',
    'Analyzer', 'HebrewIndexingAnalyzer', 'HebrewQueryAnalyzer',
    'HebrewQueryLightAnalyzer', 'HebrewExactAnalyzer',
]
