"""
HSpell Dictionary Loader
========================
Baseline loader, always available.

Reads an HSpell-style text dictionary: a directory holding words.txt (or
words.txt.gz) and an optional prefixes.txt, or a direct path to a words file.

Words file format (UTF-8):
    # comment
    surface
    surface<TAB>lemma[,lemma...]

A bare surface form is its own lemma.
"""

import gzip
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Tuple

from ..config_logging import DictionaryLoadError, get_logger
from ..dictionary import DEFAULT_PREFIXES, Dictionary
from .base import DictionaryLoader

_logger = get_logger('hebrew_analysis.loaders.hspell')


class HSpellDictionaryLoader(DictionaryLoader):
    """Loads the open HSpell-derived dictionary shipped with the plugin."""

    LOADER_NAME = "HSpell"

    DEFAULT_PATHS = (
        "/var/lib/hspell-data-files/",
        "./hspell-data-files/",
        "../hspell-data-files/",
        "./plugins/analysis-hebrew/hspell-data-files/",
        "/usr/share/elasticsearch/plugins/analysis-hebrew/hspell-data-files/",
    )

    WORDS_FILES = ("words.txt", "words.txt.gz")
    PREFIXES_FILE = "prefixes.txt"

    def __init__(self, candidate_paths: Optional[Sequence[str]] = None, encoding: str = 'utf-8'):
        super().__init__(candidate_paths)
        self.encoding = encoding

    def load(self, path: str) -> Dictionary:
        """Load and parse the dictionary at path."""
        location = Path(path)
        words_file = self._find_words_file(location)
        prefixes = self._load_prefixes(words_file.parent)

        pairs = list(self._parse_words(words_file))
        if not pairs:
            raise DictionaryLoadError(f"Dictionary at {words_file} has no entries", path=str(path))

        dictionary = Dictionary.from_pairs(
            name=self.name,
            source=str(path),
            pairs=pairs,
            prefixes=prefixes,
        )
        _logger.debug(f"Parsed {len(dictionary)} entries from {words_file}",
                      path=str(words_file), entries=len(dictionary))
        return dictionary

    def _find_words_file(self, location: Path) -> Path:
        if location.is_file():
            return location
        for filename in self.WORDS_FILES:
            candidate = location / filename
            if candidate.is_file():
                return candidate
        raise DictionaryLoadError(
            f"No words file ({', '.join(self.WORDS_FILES)}) in {location}",
            path=str(location)
        )

    def _read_lines(self, file_path: Path) -> List[str]:
        try:
            if file_path.suffix == '.gz':
                with gzip.open(file_path, 'rt', encoding=self.encoding) as f:
                    return f.read().splitlines()
            with open(file_path, 'r', encoding=self.encoding) as f:
                return f.read().splitlines()
        except (OSError, UnicodeDecodeError) as e:
            raise DictionaryLoadError(f"Could not read {file_path}: {e}", path=str(file_path)) from e

    def _parse_words(self, words_file: Path) -> Iterator[Tuple[str, Tuple[str, ...]]]:
        for line_no, raw in enumerate(self._read_lines(words_file), start=1):
            line = raw.strip()
            if not line or line.startswith('#'):
                continue

            fields = line.split('\t')
            if len(fields) > 2:
                raise DictionaryLoadError(
                    f"Malformed entry at {words_file}:{line_no}",
                    path=str(words_file), line=line_no
                )

            surface = fields[0].strip()
            if not surface:
                raise DictionaryLoadError(
                    f"Empty surface form at {words_file}:{line_no}",
                    path=str(words_file), line=line_no
                )

            if len(fields) == 1:
                yield surface, (surface,)
                continue

            lemmas = tuple(l.strip() for l in fields[1].split(',') if l.strip())
            yield surface, lemmas or (surface,)

    def _load_prefixes(self, directory: Path) -> frozenset:
        prefixes_file = directory / self.PREFIXES_FILE
        if not prefixes_file.is_file():
            return DEFAULT_PREFIXES

        prefixes = set()
        for raw in self._read_lines(prefixes_file):
            prefix = raw.strip()
            if prefix and not prefix.startswith('#'):
                prefixes.add(prefix)
        return frozenset(prefixes)
