"""
Tests for the Plugin Entry Point
================================
Construction, loader selection and component registration.
"""

import os

import pytest

from hebrew_analysis.analysis import (
    AddSuffixFilter,
    HebrewExactAnalyzer,
    HebrewIndexingAnalyzer,
    HebrewLemmatizerFilter,
    HebrewQueryAnalyzer,
    HebrewQueryLightAnalyzer,
    HebrewTokenizer,
    NiqqudFilter,
)
from hebrew_analysis.config_logging import DictionaryNotFoundError, PrivilegeError
from hebrew_analysis.loaders import HSpellDictionaryLoader
from hebrew_analysis.loaders.base import DictionaryLoader
from hebrew_analysis.plugin import HebrewAnalysisPlugin
from hebrew_analysis.privilege import sandboxed

from .conftest import write_dictionary

INDEX_SETTINGS = {'index.number_of_shards': 1}
ENV = None


def make_plugin(tmp_path, **settings):
    """Plugin whose candidate search is confined to tmp_path."""
    base = {
        'hebrew.dict.loader': '',
        'hebrew.dict.candidate_paths': [str(tmp_path / 'candidate-a'), str(tmp_path / 'candidate-b')],
    }
    base.update(settings)
    return HebrewAnalysisPlugin(base)


class TestConstruction:
    """Tests for dictionary loading at construction."""

    def test_override_from_settings(self, tmp_path, dict_dir):
        plugin = make_plugin(tmp_path, **{'hebrew.dict.path': str(dict_dir)})
        assert plugin.get_dictionary().source == str(dict_dir)
        assert plugin.dictionary_handle.is_set
        assert [a.path for a in plugin.attempts] == [str(dict_dir)]

    def test_candidate_used_without_override(self, tmp_path):
        candidate = write_dictionary(tmp_path / 'candidate-b')
        plugin = make_plugin(tmp_path)
        assert plugin.get_dictionary().source == str(candidate)
        assert plugin.loader.name == "HSpell"

    def test_single_string_candidate_path(self, dict_dir):
        plugin = HebrewAnalysisPlugin({
            'hebrew.dict.loader': '',
            'hebrew.dict.candidate_paths': str(dict_dir),
        })
        assert plugin.get_dictionary().source == str(dict_dir)
        assert [a.path for a in plugin.attempts] == [str(dict_dir)]

    def test_env_override(self, tmp_path, dict_dir, monkeypatch):
        monkeypatch.setenv('HEBREW_DICT_PATH', str(dict_dir))
        plugin = make_plugin(tmp_path)
        assert plugin.get_dictionary().source == str(dict_dir)

    def test_no_dictionary_aborts(self, tmp_path):
        with pytest.raises(DictionaryNotFoundError) as excinfo:
            make_plugin(tmp_path, **{'hebrew.dict.path': str(tmp_path / 'missing')})
        assert excinfo.value.attempted_paths == [
            str(tmp_path / 'missing'),
            str(tmp_path / 'candidate-a'),
            str(tmp_path / 'candidate-b'),
        ]

    def test_absent_enhanced_loader_uses_baseline(self, tmp_path, dict_dir):
        """The default enhanced loader is not installed here."""
        plugin = make_plugin(tmp_path, **{
            'hebrew.dict.loader': 'hebmorph_dictionary.impl:HebMorphDictionaryLoader',
            'hebrew.dict.path': str(dict_dir),
        })
        assert isinstance(plugin.loader, HSpellDictionaryLoader)

    def test_enhanced_loader_candidates(self, tmp_path, dict_dir):
        class Enhanced(HSpellDictionaryLoader):
            LOADER_NAME = "HebMorph"

            def __init__(self):
                super().__init__([str(dict_dir)])

        plugin = HebrewAnalysisPlugin({}, enhanced_loader=Enhanced)
        assert plugin.loader.name == "HebMorph"
        assert plugin.get_dictionary().name == "HebMorph"

    def test_failing_enhanced_loader_falls_back(self, tmp_path, dict_dir):
        class Broken(DictionaryLoader):
            def __init__(self):
                raise OSError("no license")

            def load(self, path):
                return None

        plugin = HebrewAnalysisPlugin(
            {'hebrew.dict.candidate_paths': [str(dict_dir)]},
            enhanced_loader=Broken,
        )
        assert plugin.loader.name == "HSpell"

    def test_sandboxed_construction_refused(self, tmp_path, dict_dir):
        with sandboxed():
            with pytest.raises(PrivilegeError):
                make_plugin(tmp_path, **{'hebrew.dict.path': str(dict_dir)})

    def test_sandboxed_construction_with_capability(self, tmp_path, dict_dir, capability):
        with sandboxed():
            plugin = HebrewAnalysisPlugin(
                {'hebrew.dict.path': str(dict_dir), 'hebrew.dict.loader': ''},
                capability=capability,
            )
        assert len(plugin.get_dictionary()) == 9

    def test_status(self, tmp_path, dict_dir):
        status = make_plugin(tmp_path, **{'hebrew.dict.path': str(dict_dir)}).get_status()
        assert status['loader'] == 'HSpell'
        assert status['entries'] == 9
        assert status['attempts'][0]['outcome'] == 'loaded'


@pytest.fixture
def plugin(tmp_path, dict_dir):
    return make_plugin(tmp_path, **{'hebrew.dict.path': str(dict_dir)})


class TestRegistration:
    """Tests for the registered component providers."""

    def test_registered_names(self, plugin):
        assert set(plugin.get_tokenizers()) == {'hebrew'}
        assert set(plugin.get_token_filters()) == {'hebrew_lemmatizer', 'niqqud', 'add_suffix'}
        assert set(plugin.get_analyzers()) == {
            'hebrew', 'hebrew_query', 'hebrew_query_light', 'hebrew_exact'
        }

    def test_mappings_read_only(self, plugin):
        with pytest.raises(TypeError):
            plugin.get_analyzers()['other'] = None

    def test_tokenizer_provider(self, plugin):
        tokenizer = plugin.get_tokenizers()['hebrew'](INDEX_SETTINGS, ENV, 'hebrew', {'max_token_length': '10'})
        assert isinstance(tokenizer, HebrewTokenizer)
        assert tokenizer.max_token_length == 10

    def test_filter_providers(self, plugin):
        filters = plugin.get_token_filters()
        lemmatizer = filters['hebrew_lemmatizer'](INDEX_SETTINGS, ENV, 'lem', {'keep_original': 'false'})
        assert isinstance(lemmatizer, HebrewLemmatizerFilter)
        assert lemmatizer.dictionary is plugin.get_dictionary()
        assert lemmatizer.keep_original is False
        assert isinstance(filters['niqqud'](INDEX_SETTINGS, ENV, 'niqqud', {}), NiqqudFilter)
        suffix = filters['add_suffix'](INDEX_SETTINGS, ENV, 'suffix', {'suffix': '#'})
        assert isinstance(suffix, AddSuffixFilter)
        assert suffix.suffix == '#'

    @pytest.mark.parametrize('name, cls', [
        ('hebrew', HebrewIndexingAnalyzer),
        ('hebrew_query', HebrewQueryAnalyzer),
        ('hebrew_query_light', HebrewQueryLightAnalyzer),
        ('hebrew_exact', HebrewExactAnalyzer),
    ])
    def test_analyzer_providers(self, plugin, name, cls):
        analyzer = plugin.get_analyzers()[name](INDEX_SETTINGS, ENV, name, {})
        assert isinstance(analyzer, cls)

    def test_new_instance_per_invocation(self, plugin):
        provider = plugin.get_analyzers()['hebrew_query']
        first = provider(INDEX_SETTINGS, ENV, 'q', {})
        second = provider(INDEX_SETTINGS, ENV, 'q', {})
        assert first is not second
        assert first.filters[-1].dictionary is second.filters[-1].dictionary

    def test_analyzer_end_to_end(self, plugin):
        analyzer = plugin.get_analyzers()['hebrew_query'](INDEX_SETTINGS, ENV, 'q', {})
        assert analyzer.terms('הילדים') == ['הילדים', 'ילד']

    def test_configured_suffix_default(self, tmp_path, dict_dir):
        plugin = make_plugin(tmp_path, **{
            'hebrew.dict.path': str(dict_dir),
            'hebrew.analysis.suffix': '#',
        })
        analyzer = plugin.get_analyzers()['hebrew_exact'](INDEX_SETTINGS, ENV, 'e', {})
        assert analyzer.terms('ספר') == ['ספר#']


def test_relative_candidate_paths(tmp_path, monkeypatch):
    """Default relative candidates resolve against the working directory."""
    write_dictionary(tmp_path / 'hspell-data-files')
    monkeypatch.chdir(tmp_path)
    plugin = HebrewAnalysisPlugin({'hebrew.dict.loader': ''})
    found = plugin.get_dictionary().source
    assert found in HSpellDictionaryLoader.DEFAULT_PATHS
    assert os.path.samefile(found, tmp_path / 'hspell-data-files')


class TestBlueprintSettings:
    """Host settings given as strings reach the check-word endpoint typed."""

    def client_for(self, tmp_path, dict_dir, **settings):
        from flask import Flask
        plugin = make_plugin(tmp_path, **{'hebrew.dict.path': str(dict_dir)}, **settings)
        app = Flask(__name__)
        for blueprint in plugin.get_blueprints():
            app.register_blueprint(blueprint)
        return app.test_client()

    def test_spelling_disabled_by_string(self, tmp_path, dict_dir):
        client = self.client_for(tmp_path, dict_dir, **{'hebrew.spelling.enabled': 'false'})
        data = client.get('/_hebrew/check-word', query_string={'word': 'ספרימ'}).get_json()
        assert data['known'] is False
        assert data['suggestions'] == []

    def test_edit_distance_given_as_string(self, tmp_path, dict_dir):
        pytest.importorskip('symspellpy')
        client = self.client_for(tmp_path, dict_dir, **{'hebrew.spelling.max_edit_distance': '1'})
        response = client.get('/_hebrew/check-word', query_string={'word': 'ספרימ'})
        assert response.status_code == 200
        assert 'ספרים' in [s['suggestion'] for s in response.get_json()['suggestions']]
