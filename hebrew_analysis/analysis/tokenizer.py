"""
Hebrew Tokenizer
================
Splits text into Hebrew, non-Hebrew and numeric tokens with offsets.

Hebrew tokens keep niqqud and inner geresh/gershayim, so acronyms such as
צה"ל and abbreviations such as ג' stay whole.
"""

import re
from dataclasses import dataclass
from typing import Iterator, List

HEBREW = 'Hebrew'
NON_HEBREW = 'NonHebrew'
NUMERIC = 'Numeric'
LEMMA = 'Lemma'
EXACT = 'Exact'

_TOKEN_RE = re.compile(
    r"(?P<hebrew>[\u05D0-\u05EA][\u05D0-\u05EA\u0591-\u05BD\u05BF\u05C1\u05C2\u05C4\u05C5\u05C7\u05F3\u05F4'\"]*)"
    r"|(?P<numeric>\d+(?:[.,]\d+)*)"
    r"|(?P<other>(?:(?![\u05D0-\u05EA\u0591-\u05C7])[^\W_])+)"
)

# Closing quotes belong to the sentence, not the word. A trailing geresh is
# an abbreviation mark and stays.
_TRAILING_QUOTES = "\"\u05F4"


@dataclass(frozen=True)
class Token:
    """A single term with its source offsets and position."""
    text: str
    start: int
    end: int
    type: str
    position: int
    position_increment: int = 1
    keyword: bool = False

    def to_dict(self) -> dict:
        return {
            'text': self.text,
            'start': self.start,
            'end': self.end,
            'type': self.type,
            'position': self.position,
        }


class HebrewTokenizer:
    """Regex tokenizer aware of Hebrew script."""

    def __init__(self, max_token_length: int = 255):
        self.max_token_length = max_token_length

    def _matches(self, text: str) -> Iterator[re.Match]:
        return _TOKEN_RE.finditer(text)

    def tokenize(self, text: str) -> List[Token]:
        tokens: List[Token] = []
        position = -1
        increment = 1

        for match in self._matches(text or ''):
            kind = match.lastgroup
            value = match.group()
            start = match.start()

            if kind == 'hebrew':
                value = value.rstrip(_TRAILING_QUOTES)
                token_type = HEBREW
            elif kind == 'numeric':
                token_type = NUMERIC
            else:
                token_type = NON_HEBREW

            if len(value) > self.max_token_length:
                increment += 1
                continue

            position += increment
            tokens.append(Token(
                text=value,
                start=start,
                end=start + len(value),
                type=token_type,
                position=position,
                position_increment=increment,
            ))
            increment = 1

        return tokens

    __call__ = tokenize
