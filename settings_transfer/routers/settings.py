from __future__ import annotations

import logging
from functools import lru_cache
from typing import Iterator

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import JSONResponse, Response

from ..env_settings import get_env
from ..repo import db_session
from ..services import (
    DbSettingsStore,
    InvalidSettingsFile,
    SettingApplyError,
    SettingsCatalog,
    export_filename,
    export_settings,
    import_result_message,
    import_settings,
    load_catalog,
    parse_merge_mode,
    render_settings_json,
)
from ..services.settings import SettingsStore


router = APIRouter()
log = logging.getLogger(__name__)


def _truthy_flag(v) -> bool:
    """Normalize HTML form / query flags (checkboxes) into bool."""
    if isinstance(v, bool):
        return v
    if v is None:
        return False
    s = str(v).strip().lower()
    return s in {"1", "true", "on", "yes", "y"}


def ui_result(ok: bool, message: str, details: str | None = None, **extra) -> dict:
    """Unified result shape: {"ok": bool, "message": str, "details": str, ...}."""

    out = {
        "ok": bool(ok),
        "message": str(message or ""),
        "details": str(details or ""),
    }
    out.update(extra)
    return out


def _import_error(reason: str, details: str | None = None) -> JSONResponse:
    return JSONResponse(ui_result(False, f"Error when importing settings: {reason}", details))


@lru_cache(maxsize=1)
def get_catalog() -> SettingsCatalog:
    return load_catalog(get_env().catalog_path)


def get_store() -> Iterator[SettingsStore]:
    with db_session() as db:
        yield DbSettingsStore(db)


@router.get("/settings/export.json")
def settings_export_json(
    verbose: str = "",
    pretty: str = "",
    catalog: SettingsCatalog = Depends(get_catalog),
    store: SettingsStore = Depends(get_store),
):
    data = export_settings(catalog, store, verbose=_truthy_flag(verbose))
    body = render_settings_json(data, pretty=_truthy_flag(pretty))

    filename = export_filename()
    log.info("Settings exported: verbose=%s, file=%s", _truthy_flag(verbose), filename)
    return Response(
        content=body.encode("utf-8"),
        media_type="application/json",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.post("/settings/import")
async def settings_import_json(
    mode: str = Form(""),
    file: UploadFile | None = File(None),
    store: SettingsStore = Depends(get_store),
):
    try:
        merge_mode = parse_merge_mode(mode)
    except ValueError as e:
        return JSONResponse(ui_result(False, "Bad request", str(e)), status_code=400)

    if file is None or not (file.filename or "").strip():
        return _import_error("No file provided.")

    content_type = (getattr(file, "content_type", "") or "").lower()
    if content_type and ("json" not in content_type) and (content_type not in ("text/plain", "application/octet-stream")):
        return _import_error("Expected a JSON file.")

    max_bytes = int(get_env().max_import_bytes)
    raw = await file.read(max_bytes + 1)
    if len(raw) > max_bytes:
        return _import_error("The submitted file is too big.", f"Limit is {max_bytes // 1024} KB.")

    try:
        count = import_settings(raw, store, merge_mode)
    except InvalidSettingsFile as e:
        log.warning("Settings import rejected: %s", e, exc_info=True)
        return _import_error(str(e))
    except SettingApplyError as e:
        log.warning("Settings import failed at %s", e.setting_id, exc_info=True)
        return _import_error(str(e), e.setting_id)

    return JSONResponse(ui_result(True, import_result_message(count), count=count))
