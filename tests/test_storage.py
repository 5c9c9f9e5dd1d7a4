from __future__ import annotations

from sqlalchemy.exc import SQLAlchemyError

from settings_transfer.services.settings import (
    MISSING,
    DbSettingsStore,
    apply_settings,
    export_settings_simple,
    extract_settings,
)


def test_memory_store_contract(memory_store):
    assert memory_store.get("nope") is MISSING
    assert memory_store.get("nope", None) is None
    assert memory_store.create("site_name", "x") is False
    assert memory_store.update("nope", "x") is False
    assert memory_store.create("nope", "x") is True
    assert memory_store.update("nope", "y") is True
    assert memory_store.get("nope") == "y"


def test_db_store_create_get_update(db_store):
    assert db_store.get("a") is MISSING

    assert db_store.create("a", {"nested": [1, 2]}) is True
    assert db_store.get("a") == {"nested": [1, 2]}
    assert db_store.create("a", 1) is False

    assert db_store.update("a", "text") is True
    assert db_store.get("a") == "text"
    assert db_store.update("missing", 1) is False


def test_db_store_keeps_null_values(db_store):
    assert db_store.create("nothing", None) is True
    assert db_store.get("nothing") is None


def test_db_store_values_persist_across_sessions(session_factory):
    with session_factory() as db:
        DbSettingsStore(db).create("a", 1)

    with session_factory() as db:
        assert DbSettingsStore(db).get("a") == 1


def test_db_store_write_error_reports_false(db_store, monkeypatch):
    def boom():
        raise SQLAlchemyError("disk full")

    monkeypatch.setattr(db_store.db, "commit", boom)

    assert db_store.create("a", 1) is False


def test_apply_and_round_trip_with_db_store(catalog, db_store):
    settings = {"site_name": "Shop", "maintenance_mode": "yes", "timezone": "UTC", "mail_from_name": None}

    assert apply_settings(db_store, settings, "full") == 4
    assert apply_settings(db_store, settings, "full") == 0

    exported = export_settings_simple(catalog, db_store)
    assert extract_settings(exported) == settings


def test_db_store_update_error_keeps_previous_value(db_store, monkeypatch):
    assert db_store.create("a", "before") is True

    def boom():
        raise SQLAlchemyError("disk full")

    monkeypatch.setattr(db_store.db, "commit", boom)

    assert db_store.update("a", "after") is False
    assert db_store.get("a") == "before"
