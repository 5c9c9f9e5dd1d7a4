"""
Shared pytest fixtures for settings export / import tests.

Provides a small catalog, in-memory and SQLite-backed stores.
"""

from typing import Any, Dict

import pytest
from sqlalchemy.orm import sessionmaker

from settings_transfer import models  # noqa: F401  (registers tables)
from settings_transfer.db import Base, make_engine
from settings_transfer.services.settings import (
    DbSettingsStore,
    MemorySettingsStore,
    SettingsCatalog,
)


@pytest.fixture
def catalog_dict() -> Dict[str, Any]:
    return {
        "pages": [
            {
                "id": "general",
                "label": "General",
                "sections": {"": "General options", "locale": "Locale"},
                "settings": {
                    "": [
                        {"id": "general_options", "type": "title", "title": "General options"},
                        {
                            "id": "site_name",
                            "type": "text",
                            "title": "Site name",
                            "desc": "Shown in page titles.",
                            "default": "",
                        },
                        {"id": "maintenance_mode", "type": "checkbox", "default": "no"},
                        {"id": "general_options", "type": "sectionend"},
                    ],
                    "locale": [
                        {"id": "timezone", "type": "select", "title": "Timezone", "desc_hint": "Used for dates.", "default": "UTC"},
                        {"id": "", "type": "text", "title": "No id"},
                    ],
                },
            },
            {
                # Only markers: must disappear from verbose output.
                "id": "empty",
                "label": "Empty",
                "sections": {"": "Nothing"},
                "settings": {"": [{"id": "empty_title", "type": "title"}]},
            },
            {
                "id": "mail",
                "label": "Mail",
                "sections": {"": "Sender", "unused": "Unused"},
                "settings": {"": [{"id": "mail_from_name", "type": "text", "title": "From name"}]},
            },
        ]
    }


@pytest.fixture
def catalog(catalog_dict) -> SettingsCatalog:
    return SettingsCatalog.from_dict(catalog_dict)


@pytest.fixture
def memory_store() -> MemorySettingsStore:
    return MemorySettingsStore(
        {
            "site_name": "Demo shop",
            "maintenance_mode": "no",
            "timezone": "Europe/Berlin",
        }
    )


@pytest.fixture
def session_factory(tmp_path):
    engine = make_engine(f"sqlite:///{(tmp_path / 'settings.db').as_posix()}")
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(bind=engine, autocommit=False, autoflush=False, future=True)
    engine.dispose()


@pytest.fixture
def db_store(session_factory):
    db = session_factory()
    try:
        yield DbSettingsStore(db)
    finally:
        db.close()


class FailingStore(MemorySettingsStore):
    """Memory store whose writes fail for selected keys."""

    def __init__(self, initial=None, fail_on=()):
        super().__init__(initial)
        self.fail_on = set(fail_on)

    def create(self, key, value):
        if key in self.fail_on:
            return False
        return super().create(key, value)

    def update(self, key, value):
        if key in self.fail_on:
            return False
        return super().update(key, value)


@pytest.fixture
def failing_store_cls():
    return FailingStore
