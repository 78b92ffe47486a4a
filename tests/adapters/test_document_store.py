"""Tests for the SQLite-backed DocumentStore."""

from __future__ import annotations

import stat

import pytest

from pathly_cli.adapters import SqliteDocumentStore


@pytest.fixture()
def vault(tmp_path):
    store = SqliteDocumentStore(tmp_path / "nested" / "vault.db")
    yield store
    store.close()


@pytest.mark.asyncio
async def test_get_missing_key(vault):
    assert await vault.get("@pathly:goals") is None


@pytest.mark.asyncio
async def test_set_and_get_roundtrip(vault):
    document = [{"id": 1, "title": "Café", "history": ["2024-06-12T10:00:00"]}]
    await vault.set("@pathly:goals", document)
    assert await vault.get("@pathly:goals") == document


@pytest.mark.asyncio
async def test_set_replaces_previous_value(vault):
    await vault.set("@pathly:lifetime_points", 10)
    await vault.set("@pathly:lifetime_points", 25)
    assert await vault.get("@pathly:lifetime_points") == 25


@pytest.mark.asyncio
async def test_delete(vault):
    await vault.set("k", {"a": 1})
    assert await vault.delete("k")
    assert not await vault.delete("k")
    assert await vault.get("k") is None


@pytest.mark.asyncio
async def test_data_survives_reopen(tmp_path):
    path = tmp_path / "vault.db"
    first = SqliteDocumentStore(path)
    await first.set("@pathly_rewards", [{"id": 3}])
    first.close()

    second = SqliteDocumentStore(path)
    try:
        assert await second.get("@pathly_rewards") == [{"id": 3}]
    finally:
        second.close()


@pytest.mark.asyncio
async def test_new_vault_is_private(vault):
    await vault.set("k", 1)
    assert stat.S_IMODE(vault.db_path.stat().st_mode) == 0o600


def test_close_without_connection_is_safe(tmp_path):
    SqliteDocumentStore(tmp_path / "unused.db").close()
