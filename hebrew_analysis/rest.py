"""
Check-Word Flask Routes
=======================
Diagnostic endpoint showing how the loaded dictionary reads a word.

GET /_hebrew/check-word/<word>
GET /_hebrew/check-word?word=<word>
"""

import time
from functools import wraps
from typing import Optional

from flask import Blueprint, jsonify, request

from .analysis.filters import strip_niqqud
from .config import SpellingConfig
from .config_logging import HebrewAnalysisError, ValidationError, get_logger, new_correlation_id
from .registry import DictionaryHandle
from .spelling import DictionarySpeller

logger = get_logger('hebrew_analysis.rest')

MAX_WORD_LENGTH = 255


def handle_api_errors(f):
    """Standard error envelope for check-word routes."""
    @wraps(f)
    def decorated(*args, **kwargs):
        correlation_id = new_correlation_id()
        start_time = time.time()
        try:
            result = f(*args, **kwargs)

            elapsed = time.time() - start_time
            if elapsed > 5.0:
                logger.warning(f"Slow check-word call: {f.__name__} took {elapsed:.1f}s")

            return result

        except HebrewAnalysisError as e:
            log = logger.warning if e.status_code < 500 else logger.error
            log(f"{e.code} in {f.__name__}: {e.message}")
            payload = e.to_dict()
            payload['error']['correlation_id'] = correlation_id
            return jsonify(payload), e.status_code
        except Exception as e:
            logger.exception(f"Unexpected error in {f.__name__}: {e}")
            return jsonify({
                'success': False,
                'error': {
                    'code': 'INTERNAL_ERROR',
                    'message': 'An unexpected error occurred',
                    'correlation_id': correlation_id
                }
            }), 500

    return decorated


def _normalize(word: Optional[str]) -> str:
    if word is None or not word.strip():
        raise ValidationError("A word to check is required", field='word')
    word = strip_niqqud(word.strip())
    if len(word) > MAX_WORD_LENGTH:
        raise ValidationError(f"Word exceeds {MAX_WORD_LENGTH} characters", field='word')
    return word


def create_check_word_blueprint(handle: DictionaryHandle,
                                spelling: Optional[SpellingConfig] = None) -> Blueprint:
    """
    Build the check-word blueprint bound to a dictionary handle.

    Args:
        handle: The plugin's shared dictionary
        spelling: Suggestion settings (defaults if omitted)
    """
    spelling = spelling or SpellingConfig()
    blueprint = Blueprint('hebrew_check_word', __name__, url_prefix='/_hebrew')
    state = {'speller': None}

    def get_speller() -> DictionarySpeller:
        if state['speller'] is None:
            state['speller'] = DictionarySpeller(
                handle.get(),
                max_edit_distance=spelling.max_edit_distance,
                prefix_length=spelling.prefix_length,
            )
        return state['speller']

    def check(word: str):
        dictionary = handle.get()
        analyses = dictionary.analyze(word)
        known = bool(analyses)

        suggestions = []
        if not known and spelling.enabled:
            suggestions = [s.to_dict() for s in get_speller().suggest(word)]

        return jsonify({
            'success': True,
            'word': word,
            'known': known,
            'lemmas': list(dictionary.lemmas(word)),
            'analyses': [a.to_dict() for a in analyses],
            'suggestions': suggestions,
            'dictionary': dictionary.name,
        })

    @blueprint.route('/check-word/<path:word>', methods=['GET'])
    @handle_api_errors
    def check_word(word):
        return check(_normalize(word))

    @blueprint.route('/check-word', methods=['GET'])
    @handle_api_errors
    def check_word_query():
        return check(_normalize(request.args.get('word')))

    return blueprint
