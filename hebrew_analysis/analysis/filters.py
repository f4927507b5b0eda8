"""
Hebrew Token Filters
====================
Stream transformations applied after tokenization.

- NiqqudFilter: strips vowel points and cantillation marks
- LowercaseFilter: lowercases non-Hebrew tokens
- AddSuffixFilter: marks tokens with a suffix for exact matching
- HebrewLemmatizerFilter: stacks dictionary lemmas on Hebrew tokens
"""

import re
from dataclasses import replace
from typing import Iterable, List, Optional, Sequence

from ..dictionary import Dictionary
from .tokenizer import EXACT, HEBREW, LEMMA, Token

# Points, cantillation and punctuation marks of the Hebrew block, excluding
# maqaf (U+05BE), paseq (U+05C0), sof pasuq (U+05C3) and nun hafukha (U+05C6).
_NIQQUD_RE = re.compile(r'[\u0591-\u05BD\u05BF\u05C1\u05C2\u05C4\u05C5\u05C7]')


class TokenFilter:
    """Base class: maps a token list to a new token list."""

    def filter(self, tokens: Iterable[Token]) -> List[Token]:
        raise NotImplementedError

    def __call__(self, tokens: Iterable[Token]) -> List[Token]:
        return self.filter(tokens)


class NiqqudFilter(TokenFilter):
    """Removes niqqud so pointed and unpointed spellings match."""

    def filter(self, tokens: Iterable[Token]) -> List[Token]:
        result = []
        for token in tokens:
            if token.type == HEBREW:
                stripped = _NIQQUD_RE.sub('', token.text)
                if stripped != token.text:
                    token = replace(token, text=stripped)
            result.append(token)
        return result


def strip_niqqud(text: str) -> str:
    """Remove niqqud from a string."""
    return _NIQQUD_RE.sub('', text)


class LowercaseFilter(TokenFilter):
    """Lowercases tokens of any type but Hebrew (which has no case)."""

    def filter(self, tokens: Iterable[Token]) -> List[Token]:
        return [
            token if token.type == HEBREW else replace(token, text=token.text.lower())
            for token in tokens
        ]


class AddSuffixFilter(TokenFilter):
    """
    Appends a suffix to matching tokens.

    With keep_original the suffixed copy is stacked on the original at the
    same position, as the indexing analyzer needs for exact-match search.
    """

    def __init__(self, suffix: str = '$', token_types: Sequence[str] = (HEBREW,),
                 keep_original: bool = False):
        if not suffix:
            raise ValueError("suffix must not be empty")
        self.suffix = suffix
        self.token_types = frozenset(token_types)
        self.keep_original = keep_original

    def _applies(self, token: Token) -> bool:
        return token.type in self.token_types and not token.keyword

    def filter(self, tokens: Iterable[Token]) -> List[Token]:
        result = []
        for token in tokens:
            if not self._applies(token):
                result.append(token)
                continue

            marked = token.text + self.suffix
            if self.keep_original:
                result.append(token)
                result.append(replace(token, text=marked, type=EXACT, position_increment=0))
            else:
                result.append(replace(token, text=marked))
        return result


class HebrewLemmatizerFilter(TokenFilter):
    """
    Adds the dictionary lemmas of each Hebrew token.

    Lemma tokens share the source token's position (increment 0). Unknown
    words pass through untouched.
    """

    def __init__(self, dictionary: Dictionary, keep_original: bool = True,
                 max_lemmas: Optional[int] = None):
        if dictionary is None:
            raise ValueError("HebrewLemmatizerFilter requires a loaded dictionary")
        if max_lemmas is not None and max_lemmas < 1:
            raise ValueError("max_lemmas must be positive")
        self.dictionary = dictionary
        self.keep_original = keep_original
        self.max_lemmas = max_lemmas

    def lemmas_for(self, word: str) -> List[str]:
        lemmas = list(self.dictionary.lemmas(word))
        if self.max_lemmas is not None:
            lemmas = lemmas[:self.max_lemmas]
        return lemmas

    def filter(self, tokens: Iterable[Token]) -> List[Token]:
        result = []
        for token in tokens:
            if token.type != HEBREW or token.keyword:
                result.append(token)
                continue

            lemmas = self.lemmas_for(token.text)
            if not lemmas:
                result.append(token)
                continue

            emitted = 0
            if self.keep_original:
                result.append(token)
                emitted += 1

            for lemma in lemmas:
                if self.keep_original and lemma == token.text:
                    continue
                result.append(replace(
                    token,
                    text=lemma,
                    type=LEMMA,
                    position_increment=token.position_increment if emitted == 0 else 0,
                ))
                emitted += 1

        return result
