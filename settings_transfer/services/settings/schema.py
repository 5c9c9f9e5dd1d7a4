from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr

MergeMode = Literal["full", "create_only", "replace_only"]
MERGE_MODES: tuple[str, ...] = ("full", "create_only", "replace_only")

# Setting types that only mark up the catalog and never hold a value.
STRUCTURAL_SETTING_TYPES = frozenset({"title", "sectionend"})

# Definition field -> verbose snapshot field, in output order.
VERBOSE_INFO_FIELDS: tuple[tuple[str, str], ...] = (
    ("title", "title"),
    ("desc", "description"),
    ("desc_hint", "description_hint"),
    ("type", "type"),
    ("default", "default"),
)


class SettingDefinition(BaseModel):
    """A setting as described by the catalog (metadata only, no value)."""

    model_config = ConfigDict(extra="allow", frozen=True)

    id: str = Field(default="")
    title: Optional[str] = None
    desc: Optional[str] = None
    desc_hint: Any = None
    type: Optional[str] = None
    default: Any = None

    @property
    def holds_value(self) -> bool:
        return bool(self.id) and self.type not in STRUCTURAL_SETTING_TYPES


# --- snapshot documents -------------------------------------------------------
#
# Two shapes, told apart by the top-level key:
#   {"settings": {id: value}}                                      simple
#   {"pages": [{id, label, sections: [{id, title, settings: [...]}]}]}  verbose
#
# Parsing models are strict about the fields extraction relies on and
# ignore everything else.


class VerboseSetting(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: StrictStr
    title: Any = None
    description: Any = None
    description_hint: Any = None
    type: Any = None
    default: Any = None
    # Required, but null is a valid value.
    value: Any


class VerboseSection(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Any = None
    title: Any = None
    settings: list[VerboseSetting]


class VerbosePage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Any = None
    label: Any = None
    sections: list[VerboseSection]


class VerboseSnapshot(BaseModel):
    model_config = ConfigDict(extra="ignore")

    pages: list[VerbosePage]

    def flatten(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for page in self.pages:
            for section in page.sections:
                for setting in section.settings:
                    out[setting.id] = setting.value
        return out


class SimpleSnapshot(BaseModel):
    model_config = ConfigDict(extra="ignore")

    settings: dict[str, Any]

    def flatten(self) -> dict[str, Any]:
        return dict(self.settings)
