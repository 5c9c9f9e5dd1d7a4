from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError

from .catalog import SettingsCatalog
from .schema import (
    MERGE_MODES,
    VERBOSE_INFO_FIELDS,
    MergeMode,
    SimpleSnapshot,
    VerbosePage,
    VerboseSection,
    VerboseSetting,
    VerboseSnapshot,
)
from .storage import MISSING, SettingsStore

log = logging.getLogger(__name__)


class InvalidSettingsFile(ValueError):
    """The document is not a settings export (bad JSON or wrong structure)."""


class SettingApplyError(RuntimeError):
    """A setting could not be created or updated; the import stopped there."""

    def __init__(self, setting_id: str) -> None:
        super().__init__(f"Setting creation or update failed. The setting that failed is: {setting_id}")
        self.setting_id = setting_id


# --- export -------------------------------------------------------------------


def _current_value(store: SettingsStore, setting_id: str) -> Any:
    value = store.get(setting_id)
    return None if value is MISSING else value


def export_settings_simple(catalog: SettingsCatalog, store: SettingsStore) -> dict[str, Any]:
    """Flat snapshot: {"settings": {id: value}}."""

    settings: dict[str, Any] = {}
    for definition in catalog.iter_value_settings():
        settings[definition.id] = _current_value(store, definition.id)
    return SimpleSnapshot(settings=settings).model_dump()


def export_settings_verbose(catalog: SettingsCatalog, store: SettingsStore) -> dict[str, Any]:
    """Self-describing snapshot grouped by page and section.

    Each setting carries whichever of title/description/type/default the catalog
    defines plus its current value. Sections without settings and pages without
    sections are left out.
    """

    pages: list[VerbosePage] = []
    for page in catalog.get_settings_pages():
        sections: list[VerboseSection] = []
        for section_id, section_title in page.get_sections().items():
            settings: list[VerboseSetting] = []
            for definition in page.get_settings(section_id):
                if not definition.holds_value:
                    continue
                info = {}
                for src, dst in VERBOSE_INFO_FIELDS:
                    v = getattr(definition, src, None)
                    if v is not None:
                        info[dst] = v
                settings.append(
                    VerboseSetting(id=definition.id, value=_current_value(store, definition.id), **info)
                )
            if settings:
                sections.append(VerboseSection(id=section_id, title=section_title, settings=settings))
        if sections:
            pages.append(VerbosePage(id=page.id, label=page.label, sections=sections))

    # exclude_unset keeps absent metadata out while preserving value=None.
    return VerboseSnapshot(pages=pages).model_dump(exclude_unset=True)


def export_settings(catalog: SettingsCatalog, store: SettingsStore, *, verbose: bool = False) -> dict[str, Any]:
    if verbose:
        return export_settings_verbose(catalog, store)
    return export_settings_simple(catalog, store)


def render_settings_json(data: dict[str, Any], *, pretty: bool = False) -> str:
    if pretty:
        return json.dumps(data, ensure_ascii=False, indent=4)
    return json.dumps(data, ensure_ascii=False, separators=(",", ":"))


def export_filename(now: datetime | None = None) -> str:
    ts = (now or datetime.now(timezone.utc)).strftime("%Y%m%d%H%M")
    return f"settings-{ts}.json"


# --- import: extraction -------------------------------------------------------


def extract_settings(document: Any) -> dict[str, Any]:
    """Collapse either snapshot shape into a flat {id: value} mapping.

    A document with a "pages" key is read as verbose, anything else must carry
    a "settings" mapping. Raises InvalidSettingsFile otherwise; never returns a
    partial mapping.
    """

    if not isinstance(document, dict):
        raise InvalidSettingsFile("Top-level JSON value is not an object.")

    try:
        if "pages" in document:
            return VerboseSnapshot.model_validate(document).flatten()
        if "settings" not in document:
            raise InvalidSettingsFile("Neither 'pages' nor 'settings' found.")
        return SimpleSnapshot.model_validate(document).flatten()
    except ValidationError as e:
        raise InvalidSettingsFile(str(e)) from e


# --- import: apply ------------------------------------------------------------


def parse_merge_mode(text: str | None) -> MergeMode:
    mode = (text or "").strip()
    if mode not in MERGE_MODES:
        raise ValueError(f"Unknown import mode: {text!r} (expected one of {', '.join(MERGE_MODES)})")
    return mode  # type: ignore[return-value]


def _same_value(a: Any, b: Any) -> bool:
    # 1, 1.0 and True compare equal in Python but are different settings values,
    # at any nesting depth.
    if type(a) is not type(b):
        return False
    if isinstance(a, dict):
        return a.keys() == b.keys() and all(_same_value(a[k], b[k]) for k in a)
    if isinstance(a, (list, tuple)):
        return len(a) == len(b) and all(_same_value(x, y) for x, y in zip(a, b))
    return a == b


def apply_settings(store: SettingsStore, settings: dict[str, Any], mode: MergeMode) -> int:
    """Create or update settings in `store` according to `mode`.

    - full: create missing settings, update changed ones.
    - create_only: only create settings that do not exist yet.
    - replace_only: only update settings that already exist.

    Unchanged values are skipped and not counted. Returns the number of settings
    written. On the first failed write raises SettingApplyError; writes done
    before it are kept.
    """

    count = 0
    for name, value in settings.items():
        previous = store.get(name)

        if mode == "create_only" and previous is not MISSING:
            log.debug("Skip %s: already exists", name)
            continue
        if mode == "replace_only" and previous is MISSING:
            log.debug("Skip %s: does not exist", name)
            continue

        if previous is MISSING:
            ok = store.create(name, value)
        elif not _same_value(value, previous):
            ok = store.update(name, value)
        else:
            continue

        if not ok:
            log.warning("Settings import stopped at %s after %d written", name, count)
            raise SettingApplyError(name)

        count += 1

    log.info("Settings import applied: mode=%s, written=%d, total=%d", mode, count, len(settings))
    return count


def import_settings(payload: str | bytes, store: SettingsStore, mode: MergeMode) -> int:
    """Parse a settings export and apply it to `store`.

    Raises InvalidSettingsFile for undecodable or foreign documents and
    SettingApplyError when a write fails.
    """

    try:
        if isinstance(payload, bytes):
            payload = payload.decode("utf-8-sig")
        raw = json.loads(payload)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise InvalidSettingsFile("Invalid file format.") from e

    try:
        settings = extract_settings(raw)
    except InvalidSettingsFile as e:
        log.info("Rejected settings file: %s", e)
        raise InvalidSettingsFile("Not a valid settings export file.") from e

    return apply_settings(store, settings, mode)


def import_result_message(count: int) -> str:
    if count == 0:
        return "No settings were imported (empty file or all the settings were skipped)."
    return f"Settings import completed successfully, {count} settings were imported."
