"""Application service layer.

Routers import from here:
    from settings_transfer.services import ...
"""

from .settings import (
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

__all__ = [
    "DbSettingsStore",
    "InvalidSettingsFile",
    "SettingApplyError",
    "SettingsCatalog",
    "export_filename",
    "export_settings",
    "import_result_message",
    "import_settings",
    "load_catalog",
    "parse_merge_mode",
    "render_settings_json",
]
