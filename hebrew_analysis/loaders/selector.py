"""
Loader Selector
===============
Chooses the dictionary loader: the enhanced (commercial) loader when it is
installed and constructible, the baseline HSpell loader otherwise.

The enhanced loader is an explicit provider: a "module:ClassName" dotted name
resolved once with importlib, or any zero-argument callable.
"""

import importlib
from typing import Callable, Optional, Union

from ..config_logging import PrivilegeError, get_logger
from ..privilege import Capability, run_privileged
from .base import DictionaryLoader
from .hspell import HSpellDictionaryLoader

_logger = get_logger('hebrew_analysis.loaders.selector')

ENHANCED_LOADER = "hebmorph_dictionary.impl:HebMorphDictionaryLoader"

LoaderProvider = Union[str, Callable[[], DictionaryLoader], None]


def locate_loader(dotted_name: str) -> Optional[Callable[[], DictionaryLoader]]:
    """
    Resolve "package.module:ClassName" (or "package.module.ClassName").

    Returns:
        The located class, or None if it is not installed
    """
    if ':' in dotted_name:
        module_name, _, attr = dotted_name.partition(':')
    else:
        module_name, _, attr = dotted_name.rpartition('.')

    if not module_name or not attr:
        _logger.warning(f"Invalid loader name: {dotted_name!r}")
        return None

    try:
        module = importlib.import_module(module_name)
    except ImportError:
        return None
    except Exception as e:
        _logger.error(f"Importing dictionary loader module {module_name} failed: {e}", exc_info=True)
        return None

    return getattr(module, attr, None)


def _lookup(dotted_name: str, capability: Optional[Capability]) -> Optional[Callable[[], DictionaryLoader]]:
    try:
        return run_privileged(lambda: locate_loader(dotted_name), capability)
    except PrivilegeError as e:
        _logger.error(f"Dictionary loader lookup refused: {e}")
        return None


def _instantiate(factory: Callable[[], DictionaryLoader], capability: Optional[Capability]) -> Optional[DictionaryLoader]:
    try:
        loader = run_privileged(factory, capability)
    except Exception as e:
        _logger.error(f"Unable to instantiate the enhanced dictionary loader: {e}", exc_info=True)
        return None

    if not isinstance(loader, DictionaryLoader):
        _logger.error(f"Enhanced loader {factory!r} did not produce a DictionaryLoader "
                      f"(got {type(loader).__name__})")
        return None
    return loader


def select_loader(enhanced: LoaderProvider = ENHANCED_LOADER,
                  capability: Optional[Capability] = None,
                  fallback: Optional[Callable[[], DictionaryLoader]] = None) -> DictionaryLoader:
    """
    Pick the dictionary loader to use. Never raises.

    Args:
        enhanced: Dotted name or zero-argument callable; None or "" skips it
        capability: Token for the privileged lookup and instantiation
        fallback: Baseline loader factory (default HSpellDictionaryLoader)

    Returns:
        A DictionaryLoader instance
    """
    factory = None
    if isinstance(enhanced, str):
        if enhanced:
            factory = _lookup(enhanced, capability)
            if factory is None:
                _logger.info(f"Enhanced dictionary loader not available ({enhanced})")
    elif enhanced is not None:
        factory = enhanced

    if factory is not None:
        _logger.info(f"Dictionary loader available ({getattr(factory, '__name__', factory)!s})")
        loader = _instantiate(factory, capability)
        if loader is not None:
            return loader

    _logger.info("Defaulting to HSpell dictionary loader")
    return (fallback or HSpellDictionaryLoader)()
