"""
Hebrew Dictionary
=================
Immutable, parsed linguistic resource shared by all analysis components.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Iterator, List, Mapping, Optional, Tuple

# Standard Hebrew prefixes: vav, he, bet, kaf, lamed, mem, shin and the
# combinations that occur in running text.
DEFAULT_PREFIXES: FrozenSet[str] = frozenset({
    'ו', 'ה', 'ב', 'כ', 'ל', 'מ', 'ש',
    'וה', 'וב', 'וכ', 'ול', 'ומ', 'וש',
    'שה', 'שב', 'שכ', 'של', 'שמ',
    'מה', 'כש', 'לכש', 'וכש', 'ושה', 'ושב', 'ושל', 'ומה', 'כשה',
})


@dataclass(frozen=True)
class Analysis:
    """One way of reading a surface form: optional prefix plus lemma."""
    prefix: str
    lemma: str

    def to_dict(self) -> Dict[str, str]:
        return {'prefix': self.prefix, 'lemma': self.lemma}


@dataclass(frozen=True, eq=False)
class Dictionary:
    """
    Read-only lemma dictionary.

    Maps surface forms to the lemmas they inflect from. Instances are never
    mutated after loading.
    """
    name: str
    source: str
    entries: Mapping[str, Tuple[str, ...]]
    prefixes: FrozenSet[str] = DEFAULT_PREFIXES
    max_prefix_length: int = field(init=False, default=0)

    def __post_init__(self):
        if not isinstance(self.entries, MappingProxyType):
            object.__setattr__(self, 'entries', MappingProxyType(dict(self.entries)))
        object.__setattr__(self, 'prefixes', frozenset(self.prefixes))
        longest = max((len(p) for p in self.prefixes), default=0)
        object.__setattr__(self, 'max_prefix_length', longest)

    @classmethod
    def from_pairs(
        cls,
        name: str,
        source: str,
        pairs: Iterable[Tuple[str, Iterable[str]]],
        prefixes: Optional[Iterable[str]] = None
    ) -> 'Dictionary':
        """Build a dictionary from (surface, lemmas) pairs, merging duplicates."""
        merged: Dict[str, List[str]] = {}
        for surface, lemmas in pairs:
            bucket = merged.setdefault(surface, [])
            for lemma in lemmas:
                if lemma not in bucket:
                    bucket.append(lemma)
        return cls(
            name=name,
            source=source,
            entries={k: tuple(v) for k, v in merged.items()},
            prefixes=frozenset(prefixes) if prefixes is not None else DEFAULT_PREFIXES,
        )

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, word: object) -> bool:
        return word in self.entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def words(self) -> Iterator[str]:
        """Iterate over all surface forms."""
        return iter(self.entries)

    def lookup(self, word: str) -> Tuple[str, ...]:
        """Lemmas for an exact surface form (empty if unknown)."""
        return self.entries.get(word, ())

    def is_known(self, word: str) -> bool:
        """True if the word or a prefix-stripped form of it is in the dictionary."""
        return bool(self.analyze(word))

    def analyze(self, word: str) -> List[Analysis]:
        """
        Prefix-aware lookup.

        The exact form is tried first, then every known prefix the word starts
        with (longest first) against the remainder.

        Returns:
            List of Analysis objects, exact readings first, without duplicates
        """
        results: List[Analysis] = []
        seen = set()

        for lemma in self.lookup(word):
            seen.add(('', lemma))
            results.append(Analysis('', lemma))

        limit = min(self.max_prefix_length, len(word) - 1)
        for size in range(limit, 0, -1):
            prefix = word[:size]
            if prefix not in self.prefixes:
                continue
            for lemma in self.lookup(word[size:]):
                if (prefix, lemma) not in seen:
                    seen.add((prefix, lemma))
                    results.append(Analysis(prefix, lemma))

        return results

    def lemmas(self, word: str) -> Tuple[str, ...]:
        """Distinct lemmas over all analyses, in analysis order."""
        ordered: List[str] = []
        for analysis in self.analyze(word):
            if analysis.lemma not in ordered:
                ordered.append(analysis.lemma)
        return tuple(ordered)
