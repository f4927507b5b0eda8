"""
Shared fixtures for the Hebrew analysis tests.
"""

import gzip
from pathlib import Path
from typing import List, Optional

import pytest

from hebrew_analysis.dictionary import Dictionary
from hebrew_analysis.loaders.hspell import HSpellDictionaryLoader
from hebrew_analysis.privilege import grant

SAMPLE_WORDS = """\
# sample dictionary
ספר\tספר
ספרים\tספר
בית\tבית
בתים\tבית
הלך\tהלך
הולכים\tהלך
ילד\tילד
ילדים\tילד
שלום
"""

ENV_VARS = (
    'HEBREW_DICT_PATH',
    'HEBREW_DICT_LOADER',
    'HEBREW_DICT_CANDIDATE_PATHS',
    'HEBREW_CONFIG_FILE',
    'HEBREW_ANALYSIS_SUFFIX',
    'HEBREW_SPELLING_ENABLED',
    'HEBREW_SPELLING_MAX_EDIT_DISTANCE',
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep the developer's environment out of configuration."""
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)


def write_dictionary(directory: Path, words: str = SAMPLE_WORDS,
                     prefixes: Optional[List[str]] = None, compressed: bool = False) -> Path:
    """Write an HSpell-style dictionary directory and return it."""
    directory.mkdir(parents=True, exist_ok=True)
    if compressed:
        with gzip.open(directory / 'words.txt.gz', 'wt', encoding='utf-8') as f:
            f.write(words)
    else:
        (directory / 'words.txt').write_text(words, encoding='utf-8')
    if prefixes is not None:
        (directory / 'prefixes.txt').write_text('\n'.join(prefixes) + '\n', encoding='utf-8')
    return directory


@pytest.fixture
def dict_dir(tmp_path) -> Path:
    """A valid dictionary directory."""
    return write_dictionary(tmp_path / 'hspell-data-files')


@pytest.fixture
def corrupt_dir(tmp_path) -> Path:
    """A dictionary directory whose words file is malformed."""
    return write_dictionary(tmp_path / 'corrupt', words="ספר\tספר\textra\tfields\n")


@pytest.fixture
def dictionary(dict_dir) -> Dictionary:
    """The sample dictionary, loaded."""
    return HSpellDictionaryLoader().load(str(dict_dir))


@pytest.fixture
def capability():
    return grant("tests")


class RecordingLoader(HSpellDictionaryLoader):
    """HSpell loader that records every path it loads."""

    LOADER_NAME = "Recording"

    def __init__(self, candidate_paths=None):
        super().__init__(candidate_paths if candidate_paths is not None else [])
        self.loaded: List[str] = []
        self.candidates_requested = 0

    def candidate_paths(self):
        self.candidates_requested += 1
        return super().candidate_paths()

    def load(self, path):
        self.loaded.append(path)
        return super().load(path)


@pytest.fixture
def recording_loader_cls():
    return RecordingLoader
