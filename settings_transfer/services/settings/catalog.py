from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterator

from pydantic import BaseModel, Field

from .schema import SettingDefinition


class SettingsPage(BaseModel):
    """One settings page: ordered sections, each with an ordered list of settings."""

    id: str
    label: str = Field(default="")
    # section id -> section title, in display order
    sections: dict[str, str] = Field(default_factory=dict)
    # section id -> setting definitions
    settings: dict[str, list[SettingDefinition]] = Field(default_factory=dict)

    def get_sections(self) -> dict[str, str]:
        return self.sections

    def get_settings(self, section_id: str) -> list[SettingDefinition]:
        return self.settings.get(section_id) or []


class SettingsCatalog(BaseModel):
    pages: list[SettingsPage] = Field(default_factory=list)

    def get_settings_pages(self) -> list[SettingsPage]:
        return self.pages

    def iter_value_settings(self) -> Iterator[SettingDefinition]:
        """Yield every definition that holds a value, in catalog order."""
        for page in self.pages:
            for section_id in page.get_sections():
                for definition in page.get_settings(section_id):
                    if definition.holds_value:
                        yield definition

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SettingsCatalog":
        return cls.model_validate(data)


def load_catalog(path: str | Path) -> SettingsCatalog:
    """Load a catalog from a JSON file.

    Raises ValueError when the file is not valid JSON or does not describe a catalog.
    """

    p = Path(path)
    raw = p.read_text(encoding="utf-8")
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid catalog JSON in {p}: {e}") from e
    return SettingsCatalog.model_validate(data)
