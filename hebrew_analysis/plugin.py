"""
Hebrew Analysis Plugin
======================
Plugin entry point: locates and loads the dictionary, then registers the
tokenizer, token filters, analyzers and check-word endpoint with the host.

Construction fails with DictionaryNotFoundError when no dictionary can be
loaded; the host must treat that as a hard startup failure.

Every provider has the host signature
    provider(index_settings, env, name, settings) -> component
and closes over the plugin's DictionaryHandle.
"""

from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional

from flask import Blueprint

from .analysis import (
    AddSuffixFilter,
    HebrewExactAnalyzer,
    HebrewIndexingAnalyzer,
    HebrewLemmatizerFilter,
    HebrewQueryAnalyzer,
    HebrewQueryLightAnalyzer,
    HebrewTokenizer,
    NiqqudFilter,
)
from .config import PluginConfig, load_config
from .config_logging import get_logger
from .dictionary import Dictionary
from .loaders import HSpellDictionaryLoader, select_loader
from .loaders.selector import LoaderProvider
from .privilege import Capability, grant
from .registry import DictionaryHandle
from .resolver import DictionaryResolver
from .rest import create_check_word_blueprint

logger = get_logger('hebrew_analysis.plugin')

Provider = Callable[[Mapping[str, Any], Any, str, Mapping[str, Any]], Any]

_USE_CONFIG = object()


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.lower() in ('true', '1', 'yes', 'on')
    return bool(value)


def _as_optional_int(value: Any) -> Optional[int]:
    if value is None or value == '':
        return None
    return int(value)


class HebrewAnalysisPlugin:
    """
    Loads the dictionary once and exposes the analysis components.

    Args:
        settings: Host settings; 'hebrew.dict.path' overrides the search
        capability: Filesystem capability; requested from grant() if omitted,
            which fails for sandboxed callers
        enhanced_loader: Dotted name or callable for the enhanced loader
            (defaults to the configured 'hebrew.dict.loader')
        config: Prebuilt configuration (skips load_config)
    """

    PLUGIN_NAME = "analysis-hebrew"

    def __init__(self, settings: Optional[Mapping[str, Any]] = None,
                 capability: Optional[Capability] = None,
                 enhanced_loader: LoaderProvider = _USE_CONFIG,
                 config: Optional[PluginConfig] = None):
        self.capability = capability if capability is not None else grant(self.PLUGIN_NAME)
        self.config = config or load_config(settings)
        self._handle = DictionaryHandle()

        dict_config = self.config.dictionary
        enhanced = dict_config.loader if enhanced_loader is _USE_CONFIG else enhanced_loader

        def baseline():
            return HSpellDictionaryLoader(dict_config.candidate_paths)

        with logger.log_operation("dictionary resolution", override=dict_config.path or ''):
            self.loader = select_loader(enhanced, self.capability, fallback=baseline)
            resolver = DictionaryResolver(self.loader, self.capability)
            dictionary = resolver.resolve(dict_config.path)

        self.attempts = tuple(resolver.attempts)
        self._handle.set(dictionary)

    # =========================================================================
    # Dictionary access
    # =========================================================================

    @property
    def dictionary_handle(self) -> DictionaryHandle:
        return self._handle

    def get_dictionary(self) -> Dictionary:
        """The loaded dictionary."""
        return self._handle.get()

    # =========================================================================
    # Registration
    # =========================================================================

    def get_tokenizers(self) -> Mapping[str, Provider]:
        def hebrew(index_settings, env, name, settings):
            return HebrewTokenizer(
                max_token_length=int(settings.get('max_token_length', 255))
            )

        return MappingProxyType({'hebrew': hebrew})

    def get_token_filters(self) -> Mapping[str, Provider]:
        handle = self._handle
        default_suffix = self.config.analysis.suffix
        default_max_lemmas = self.config.analysis.max_lemmas

        def hebrew_lemmatizer(index_settings, env, name, settings):
            max_lemmas = settings.get('max_lemmas', default_max_lemmas)
            return HebrewLemmatizerFilter(
                handle.get(),
                keep_original=_as_bool(settings.get('keep_original', True)),
                max_lemmas=_as_optional_int(max_lemmas),
            )

        def niqqud(index_settings, env, name, settings):
            return NiqqudFilter()

        def add_suffix(index_settings, env, name, settings):
            return AddSuffixFilter(
                suffix=settings.get('suffix', default_suffix),
                keep_original=_as_bool(settings.get('keep_original', False)),
            )

        return MappingProxyType({
            'hebrew_lemmatizer': hebrew_lemmatizer,
            'niqqud': niqqud,
            'add_suffix': add_suffix,
        })

    def get_analyzers(self) -> Mapping[str, Provider]:
        handle = self._handle
        default_suffix = self.config.analysis.suffix
        default_max_lemmas = self.config.analysis.max_lemmas

        def hebrew(index_settings, env, name, settings):
            return HebrewIndexingAnalyzer(
                handle.get(),
                suffix=settings.get('suffix', default_suffix),
                max_lemmas=_as_optional_int(settings.get('max_lemmas', default_max_lemmas)),
            )

        def hebrew_query(index_settings, env, name, settings):
            return HebrewQueryAnalyzer(
                handle.get(),
                max_lemmas=_as_optional_int(settings.get('max_lemmas', default_max_lemmas)),
            )

        def hebrew_query_light(index_settings, env, name, settings):
            return HebrewQueryLightAnalyzer(handle.get())

        def hebrew_exact(index_settings, env, name, settings):
            return HebrewExactAnalyzer(handle.get(), suffix=settings.get('suffix', default_suffix))

        return MappingProxyType({
            'hebrew': hebrew,
            'hebrew_query': hebrew_query,
            'hebrew_query_light': hebrew_query_light,
            'hebrew_exact': hebrew_exact,
        })

    def get_blueprints(self) -> List[Blueprint]:
        """Flask blueprints for the diagnostic endpoints."""
        return [create_check_word_blueprint(self._handle, self.config.spelling)]

    def get_status(self) -> Dict[str, Any]:
        dictionary = self._handle.get()
        return {
            'plugin': self.PLUGIN_NAME,
            'loader': self.loader.name,
            'dictionary': dictionary.name,
            'source': dictionary.source,
            'entries': len(dictionary),
            'attempts': [a.to_dict() for a in self.attempts],
        }
