"""
Hebrew Analysis Plugin
======================
Version: 1.0.0

Loads a Hebrew dictionary once at startup and provides, on top of it:
- Dictionary loaders: open HSpell loader, optional enhanced loader
- Tokenizer and token filters (niqqud, add_suffix, hebrew_lemmatizer)
- Analyzers (hebrew, hebrew_query, hebrew_query_light, hebrew_exact)
- Check-word diagnostic endpoint (Flask)

Uses lazy loading for the plugin entry point so the loaders can be used
without Flask installed.
"""

from .config_logging import (
    DictionaryLoadError,
    DictionaryNotFoundError,
    HebrewAnalysisError,
    PrivilegeError,
)
from .dictionary import Dictionary
from .loaders import DictionaryLoader, HSpellDictionaryLoader, select_loader
from .registry import DictionaryHandle
from .resolver import DictionaryResolver, resolve

__version__ = "1.0.0"

_LAZY = {
    'HebrewAnalysisPlugin': ('hebrew_analysis.plugin', 'HebrewAnalysisPlugin'),
    'create_check_word_blueprint': ('hebrew_analysis.rest', 'create_check_word_blueprint'),
}


def __getattr__(name):
    """Lazy load Flask-dependent names on first access."""
    if name in _LAZY:
        import importlib
        module_name, attr = _LAZY[name]
        return getattr(importlib.import_module(module_name), attr)
    raise AttributeError(f"module 'hebrew_analysis' has no attribute '{name}'")


__all__ = [
    'Dictionary',
    'DictionaryHandle',
    'DictionaryLoader',
    'DictionaryResolver',
    'HSpellDictionaryLoader',
    'HebrewAnalysisPlugin',
    'create_check_word_blueprint',
    'resolve',
    'select_loader',
    'HebrewAnalysisError',
    'DictionaryLoadError',
    'DictionaryNotFoundError',
    'PrivilegeError',
]
