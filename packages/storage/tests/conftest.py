"""Shared fixtures for storage tests."""

import pytest

from packages.storage.kv_store import JsonKeyValueStore


@pytest.fixture
def state_file(tmp_path):
    return tmp_path / "state" / "state.json"


@pytest.fixture
def store(state_file):
    return JsonKeyValueStore(state_file)
