"""
Hebrew Analysis Configuration
=============================
Centralized configuration for the plugin.

Sources, lowest precedence first:
1. Defaults
2. Config file (JSON, path in HEBREW_CONFIG_FILE)
3. Host settings (flat mapping, e.g. {'hebrew.dict.path': '/dict'})
4. Environment variables (HEBREW_DICT_PATH=/dict)
"""

import os
import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional
from dataclasses import dataclass, field

from .config_logging import get_logger
from .loaders.selector import ENHANCED_LOADER

__version__ = "1.0.0"

_logger = get_logger('hebrew_analysis.config')

DICT_PATH_SETTING = 'hebrew.dict.path'
DICT_LOADER_SETTING = 'hebrew.dict.loader'


@dataclass
class DictionaryConfig:
    """Dictionary resolution configuration."""
    path: Optional[str] = None  # Override path, tried first
    loader: str = ENHANCED_LOADER  # Empty = baseline only
    candidate_paths: Optional[List[str]] = None  # None = loader defaults


@dataclass
class AnalysisConfig:
    """Analysis component defaults."""
    suffix: str = "$"
    max_lemmas: Optional[int] = None


@dataclass
class SpellingConfig:
    """Check-word suggestion configuration."""
    enabled: bool = True
    max_edit_distance: int = 2
    prefix_length: int = 7


@dataclass
class PluginConfig:
    """Master plugin configuration."""
    dictionary: DictionaryConfig = field(default_factory=DictionaryConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    spelling: SpellingConfig = field(default_factory=SpellingConfig)


def _parse_bool(value: Any) -> bool:
    """Parse boolean from string; real booleans pass through."""
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ('true', '1', 'yes', 'on')


def _parse_paths(value: Any) -> List[str]:
    """Parse an os.pathsep separated path list; lists pass through."""
    if isinstance(value, str):
        return [p for p in value.split(os.pathsep) if p]
    return [str(p) for p in value]


def _parse_optional_int(value: Any) -> Optional[int]:
    if value is None or value == '':
        return None
    return int(value)


# Host setting keys -> (section, attribute, converter)
SETTINGS_MAPPING = {
    DICT_PATH_SETTING: ('dictionary', 'path', str),
    DICT_LOADER_SETTING: ('dictionary', 'loader', str),
    'hebrew.dict.candidate_paths': ('dictionary', 'candidate_paths', _parse_paths),
    'hebrew.analysis.suffix': ('analysis', 'suffix', str),
    'hebrew.analysis.max_lemmas': ('analysis', 'max_lemmas', _parse_optional_int),
    'hebrew.spelling.enabled': ('spelling', 'enabled', _parse_bool),
    'hebrew.spelling.max_edit_distance': ('spelling', 'max_edit_distance', int),
    'hebrew.spelling.prefix_length': ('spelling', 'prefix_length', int),
}

# (section, attribute) -> converter, shared by the config file path
FIELD_CONVERTERS = {
    (section, attr): converter for section, attr, converter in SETTINGS_MAPPING.values()
}


ENV_MAPPINGS = {
    'HEBREW_DICT_PATH': ('dictionary', 'path', str),
    'HEBREW_DICT_LOADER': ('dictionary', 'loader', str),
    'HEBREW_DICT_CANDIDATE_PATHS': ('dictionary', 'candidate_paths', _parse_paths),
    'HEBREW_ANALYSIS_SUFFIX': ('analysis', 'suffix', str),
    'HEBREW_SPELLING_ENABLED': ('spelling', 'enabled', _parse_bool),
    'HEBREW_SPELLING_MAX_EDIT_DISTANCE': ('spelling', 'max_edit_distance', int),
}


def load_config(settings: Optional[Mapping[str, Any]] = None,
                config_file: Optional[Path] = None,
                environ: Optional[Mapping[str, str]] = None) -> PluginConfig:
    """
    Build a configuration from every source.

    Args:
        settings: Host settings (flat dotted keys)
        config_file: JSON file; defaults to HEBREW_CONFIG_FILE
        environ: Environment mapping (default os.environ)
    """
    environ = os.environ if environ is None else environ
    config = PluginConfig()

    if config_file is None and environ.get('HEBREW_CONFIG_FILE'):
        config_file = Path(environ['HEBREW_CONFIG_FILE'])

    if config_file is not None and Path(config_file).exists():
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                file_config = json.load(f)
            _apply_dict_to_config(config, file_config)
        except (json.JSONDecodeError, IOError) as e:
            _logger.warning(f"Could not load config file {config_file}: {e}")

    if settings:
        _apply_settings_to_config(config, settings)

    _apply_env_to_config(config, environ)

    return config


def _set_field(config: PluginConfig, section_name: str, attr: str, value: Any, source: str):
    converter = FIELD_CONVERTERS.get((section_name, attr))
    if value is not None and converter is not None:
        try:
            value = converter(value)
        except (TypeError, ValueError) as e:
            _logger.warning(f"Invalid value for {source}={value!r}: {e}")
            return
    setattr(getattr(config, section_name), attr, value)


def _apply_dict_to_config(config: PluginConfig, data: Dict[str, Any]):
    """Apply nested dictionary values to config object."""
    for section_name, section_data in data.items():
        if hasattr(config, section_name) and isinstance(section_data, dict):
            section = getattr(config, section_name)
            for key, value in section_data.items():
                if hasattr(section, key):
                    _set_field(config, section_name, key, value, f"{section_name}.{key}")


def _apply_settings_to_config(config: PluginConfig, settings: Mapping[str, Any]):
    """Apply flat host settings to config object."""
    for key, (section, attr, _) in SETTINGS_MAPPING.items():
        if key in settings and settings[key] is not None:
            _set_field(config, section, attr, settings[key], key)


def _apply_env_to_config(config: PluginConfig, environ: Mapping[str, str]):
    """Apply environment variables to config."""
    for env_var, (section, key, converter) in ENV_MAPPINGS.items():
        value = environ.get(env_var)
        if value is not None:
            try:
                setattr(getattr(config, section), key, converter(value))
            except (ValueError, AttributeError) as e:
                _logger.warning(f"Invalid env var {env_var}={value}: {e}")


# Global configuration instance
_config: Optional[PluginConfig] = None


def get_config() -> PluginConfig:
    """Get the global plugin configuration."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config():
    """Reset configuration to defaults."""
    global _config
    _config = None


def get(key: str, default: Any = None) -> Any:
    """
    Get a configuration value by dot-notation key.

    Example: get('dictionary.path') -> '/var/lib/hspell-data-files/'
    """
    obj = get_config()
    for part in key.split('.'):
        if hasattr(obj, part):
            obj = getattr(obj, part)
        else:
            return default
    return obj


def set(key: str, value: Any):
    """
    Set a configuration value by dot-notation key.

    Example: set('spelling.enabled', False)
    """
    config = get_config()
    parts = key.split('.')

    if len(parts) != 2:
        raise ValueError(f"Key must be in format 'section.key': {key}")

    section_name, attr_name = parts
    if not hasattr(config, section_name):
        raise ValueError(f"Unknown config section: {section_name}")

    section = getattr(config, section_name)
    if not hasattr(section, attr_name):
        raise ValueError(f"Unknown config key: {attr_name}")
    setattr(section, attr_name, value)
