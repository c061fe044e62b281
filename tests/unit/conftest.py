"""Pytest configuration and fixtures for unit tests."""

import pytest

from tests.unit.mocks import InMemoryDBClient


@pytest.fixture
def in_memory_db():
    """Provides a fresh InMemoryDBClient for each test."""
    return InMemoryDBClient()


@pytest.fixture
def patched_db(monkeypatch, in_memory_db):
    """Patches agenda.core.db_client functions to use InMemoryDBClient."""
    monkeypatch.setattr("agenda.core.db_client.create_record", in_memory_db.create_record)
    monkeypatch.setattr("agenda.core.db_client.get_record", in_memory_db.get_record)
    monkeypatch.setattr("agenda.core.db_client.update_record", in_memory_db.update_record)
    monkeypatch.setattr("agenda.core.db_client.delete_record", in_memory_db.delete_record)
    monkeypatch.setattr("agenda.core.db_client.list_records", in_memory_db.list_records)
    monkeypatch.setattr("agenda.core.db_client.upsert_records", in_memory_db.upsert_records)

    return in_memory_db
