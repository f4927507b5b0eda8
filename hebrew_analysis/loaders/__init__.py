"""
Dictionary Loaders
==================
Strategies for locating and parsing the Hebrew dictionary.

- HSpellDictionaryLoader: open baseline, always available
- Enhanced loader: optional, installed separately, picked by select_loader()
"""

from .base import DictionaryLoader
from .hspell import HSpellDictionaryLoader
from .selector import ENHANCED_LOADER, locate_loader, select_loader

__all__ = [
    'DictionaryLoader',
    'HSpellDictionaryLoader',
    'ENHANCED_LOADER',
    'locate_loader',
    'select_loader',
]
