from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime
from typing import Any, Iterator

from sqlalchemy.orm import Session

from .db import get_session_factory
from .models import SettingOption


@contextmanager
def db_session() -> Iterator[Session]:
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


def get_option_row(db: Session, name: str) -> SettingOption | None:
    return db.get(SettingOption, name)


def insert_option(db: Session, name: str, value: Any) -> SettingOption:
    row = SettingOption(name=name, value=value, updated_at=datetime.utcnow())
    db.add(row)
    db.commit()
    return row


def update_option(db: Session, row: SettingOption, value: Any) -> SettingOption:
    row.value = value
    row.updated_at = datetime.utcnow()
    db.commit()
    return row
