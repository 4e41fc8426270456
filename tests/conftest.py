"""Shared fixtures for backlog tests."""

import pytest

from backlog.db.backends import InMemoryBackend, JSONFileBackend
from backlog.db.store import BacklogStore


EMPTY_DB = '{ "last_item": { "type": "None" }, "epics": {}, "stories": {} }'


@pytest.fixture
def backend():
    return InMemoryBackend()


@pytest.fixture
def store(backend):
    return BacklogStore(backend)


@pytest.fixture
def db_file(tmp_path):
    """An empty database file on disk."""
    path = tmp_path / "database.json"
    path.write_text(EMPTY_DB)
    return path


@pytest.fixture
def file_store(db_file):
    return BacklogStore(JSONFileBackend(db_file))
