"""Tests for list layout preference stores."""

import json
import logging

import pytest

from catalog.preferences import (
    CARDS,
    LIST,
    GUITARS_VIEW_KEY,
    MODELS_VIEW_KEY,
    JsonFilePreferenceStore,
    MemoryPreferenceStore,
)


def test_memory_store_defaults_to_cards():
    assert MemoryPreferenceStore().get(GUITARS_VIEW_KEY) == CARDS


def test_memory_store_remembers_per_key():
    store = MemoryPreferenceStore()
    store.set(GUITARS_VIEW_KEY, LIST)
    assert store.get(GUITARS_VIEW_KEY) == LIST
    assert store.get(MODELS_VIEW_KEY) == CARDS


def test_custom_default_view():
    assert MemoryPreferenceStore(default_view=LIST).get(GUITARS_VIEW_KEY) == LIST


def test_invalid_view_is_rejected():
    with pytest.raises(ValueError):
        MemoryPreferenceStore().set(GUITARS_VIEW_KEY, 'grid')
    with pytest.raises(ValueError):
        MemoryPreferenceStore(default_view='grid')


def test_json_store_persists_across_instances(tmp_path):
    path = tmp_path / 'prefs' / 'view_preferences.json'
    JsonFilePreferenceStore(path).set(MODELS_VIEW_KEY, LIST)

    assert JsonFilePreferenceStore(path).get(MODELS_VIEW_KEY) == LIST
    assert json.loads(path.read_text()) == {MODELS_VIEW_KEY: LIST}


def test_json_store_missing_file_uses_default(tmp_path):
    assert JsonFilePreferenceStore(tmp_path / 'absent.json').get(GUITARS_VIEW_KEY) == CARDS


def test_json_store_corrupt_file_uses_default(tmp_path, caplog):
    path = tmp_path / 'prefs.json'
    path.write_text('{not json')
    with caplog.at_level(logging.WARNING):
        assert JsonFilePreferenceStore(path).get(GUITARS_VIEW_KEY) == CARDS
    assert 'Failed to load view preference' in caplog.text


def test_json_store_rejects_invalid_document(tmp_path):
    path = tmp_path / 'prefs.json'
    path.write_text(json.dumps({GUITARS_VIEW_KEY: 'grid'}))
    assert JsonFilePreferenceStore(path).get(GUITARS_VIEW_KEY) == CARDS


def test_json_store_overwrites_corrupt_file_on_set(tmp_path):
    path = tmp_path / 'prefs.json'
    path.write_text('{not json')
    store = JsonFilePreferenceStore(path)
    store.set(GUITARS_VIEW_KEY, LIST)
    assert store.get(GUITARS_VIEW_KEY) == LIST


def test_json_store_write_failure_is_logged(tmp_path, caplog):
    blocker = tmp_path / 'blocker'
    blocker.write_text('')
    store = JsonFilePreferenceStore(blocker / 'prefs.json')
    with caplog.at_level(logging.WARNING):
        assert store.set(GUITARS_VIEW_KEY, LIST) == LIST
    assert 'Failed to save view preference' in caplog.text


@pytest.mark.parametrize('key', ['', '   ', 'k' * 101])
def test_invalid_key_is_rejected(key):
    with pytest.raises(ValueError):
        MemoryPreferenceStore().set(key, LIST)


def test_overlong_key_does_not_clobber_saved_preferences(tmp_path):
    path = tmp_path / 'prefs.json'
    store = JsonFilePreferenceStore(path)
    store.set(GUITARS_VIEW_KEY, LIST)

    with pytest.raises(ValueError):
        store.set('k' * 101, LIST)

    assert store.get(GUITARS_VIEW_KEY) == LIST
    assert json.loads(path.read_text()) == {GUITARS_VIEW_KEY: LIST}


def test_key_at_length_limit_is_accepted(tmp_path):
    store = JsonFilePreferenceStore(tmp_path / 'prefs.json')
    store.set('k' * 100, LIST)
    assert store.get('k' * 100) == LIST
