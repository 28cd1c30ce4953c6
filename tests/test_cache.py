"""
Unit tests for the local snapshot cache
"""

import json

from todosync.core.cache import LocalCache
from todosync.core.models import Todo


def test_read_missing_file_returns_none(tmp_path):
    cache = LocalCache(str(tmp_path / 'missing.json'))

    assert cache.read() is None


def test_write_then_read(tmp_path):
    cache_file = tmp_path / 'nested' / 'cache.json'
    cache = LocalCache(str(cache_file))
    todos = [Todo(id=1, title='a', description='first'), Todo(id=2, title='b', is_done=True)]

    cache.write(todos)

    assert cache.read() == todos
    data = json.loads(cache_file.read_text())
    assert list(data) == ['todos'], "Snapshot lives under a single key"
    assert data['todos'][1]['isDone'] is True


def test_corrupt_file_is_ignored(tmp_path):
    cache_file = tmp_path / 'cache.json'
    cache_file.write_text('{not json')

    assert LocalCache(str(cache_file)).read() is None


def test_wrong_shape_is_ignored(tmp_path):
    cache_file = tmp_path / 'cache.json'
    cache_file.write_text(json.dumps([{'id': 1, 'title': 'legacy'}]))

    assert LocalCache(str(cache_file)).read() is None


def test_write_failure_is_swallowed(tmp_path):
    blocker = tmp_path / 'file'
    blocker.write_text('')
    cache = LocalCache(str(blocker / 'cache.json'))

    cache.write([Todo(id=1, title='a')])

    assert cache.read() is None


def test_clear(tmp_path):
    cache = LocalCache(str(tmp_path / 'cache.json'))
    cache.write([Todo(id=1, title='a')])

    cache.clear()
    cache.clear()

    assert cache.read() is None


def test_home_directory_is_expanded(tmp_path, monkeypatch):
    monkeypatch.setenv('HOME', str(tmp_path))
    cache = LocalCache('~/cache.json')

    cache.write([Todo(id=1, title='a')])

    assert cache.cache_file == tmp_path / 'cache.json'
    assert (tmp_path / 'cache.json').exists()
