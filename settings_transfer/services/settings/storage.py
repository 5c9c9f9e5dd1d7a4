from __future__ import annotations

import logging
from typing import Any, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...repo import get_option_row, insert_option, update_option

log = logging.getLogger(__name__)


class _Missing:
    """Marker for "no such setting" (distinct from a stored None)."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


class SettingsStore(Protocol):
    """Key-value settings backend.

    `create`/`update` report persistence success as a bool; they do not raise.
    """

    def get(self, key: str, default: Any = MISSING) -> Any: ...

    def create(self, key: str, value: Any) -> bool: ...

    def update(self, key: str, value: Any) -> bool: ...


class MemorySettingsStore:
    """Dict-backed store; handy for tests and dry runs."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(initial or {})

    def get(self, key: str, default: Any = MISSING) -> Any:
        return self._data.get(key, default)

    def create(self, key: str, value: Any) -> bool:
        if key in self._data:
            return False
        self._data[key] = value
        return True

    def update(self, key: str, value: Any) -> bool:
        if key not in self._data:
            return False
        self._data[key] = value
        return True

    def as_dict(self) -> dict[str, Any]:
        return dict(self._data)


class DbSettingsStore:
    """Store backed by the `settings_options` table.

    Every successful write is committed on its own; a failed write is rolled back
    and reported as False.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, key: str, default: Any = MISSING) -> Any:
        row = get_option_row(self.db, key)
        if row is None:
            return default
        return row.value

    def create(self, key: str, value: Any) -> bool:
        if get_option_row(self.db, key) is not None:
            return False
        try:
            insert_option(self.db, key, value)
        except SQLAlchemyError:
            self.db.rollback()
            log.warning("Failed to create setting %s", key, exc_info=True)
            return False
        return True

    def update(self, key: str, value: Any) -> bool:
        row = get_option_row(self.db, key)
        if row is None:
            return False
        try:
            update_option(self.db, row, value)
        except SQLAlchemyError:
            self.db.rollback()
            log.warning("Failed to update setting %s", key, exc_info=True)
            return False
        return True
